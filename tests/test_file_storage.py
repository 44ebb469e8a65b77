"""Tests for the plain-text dataset storage."""

import json
import os
import stat
import tempfile
import unittest

from core.errors import DatasetNotFoundError, DatasetReadError, DatasetWriteError
from core.models import AccuracyRecord, Dataset, WordPair
from server.file_storage import FileStorage, detect_delimiter, parse_record


class TestParseRecord(unittest.TestCase):

    def test_full_record(self):
        pair, record = parse_record('Hund,dog,1/2', ',')
        self.assertEqual(pair, WordPair('Hund', 'dog'))
        self.assertEqual(record, AccuracyRecord(1, 2))

    def test_fields_are_trimmed(self):
        pair, record = parse_record('  Hund , dog , 1/2 ', ',')
        self.assertEqual(pair, WordPair('Hund', 'dog'))
        self.assertEqual(record, AccuracyRecord(1, 2))

    def test_missing_accuracy_field(self):
        pair, record = parse_record('Hund,dog', ',')
        self.assertEqual(record, AccuracyRecord(0, 0))

    def test_malformed_accuracy_field(self):
        _, record = parse_record('Hund,dog,x/y', ',')
        self.assertEqual(record, AccuracyRecord(0, 0))

    def test_too_few_fields(self):
        self.assertIsNone(parse_record('Hund', ','))
        self.assertIsNone(parse_record('', ','))

    def test_empty_term(self):
        self.assertIsNone(parse_record(',dog,1/1', ','))

    def test_detect_delimiter(self):
        self.assertEqual(detect_delimiter(['', 'Hund;dog']), ';')
        self.assertEqual(detect_delimiter(['Hund,dog,0/0']), ',')
        self.assertEqual(detect_delimiter([]), ',')


class TestFileStorage(unittest.TestCase):
    """Tests for FileStorage."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.storage = FileStorage(config_file=os.path.join(self.tmp.name, 'config.json'),
                                   data_dir=self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, name: str, content, mode: str = 'w') -> str:
        path = os.path.join(self.tmp.name, name)
        kwargs = {} if 'b' in mode else {'encoding': 'utf-8'}
        with open(path, mode, **kwargs) as f:
            f.write(content)
        return path

    def test_load(self):
        self.write('words.csv', "Hund,dog,1/2\nKatze,cat,0/0\n")
        dataset = self.storage.load_dataset('words.csv')
        self.assertEqual(dataset.rows(), [('Hund', 'dog', 1, 2), ('Katze', 'cat', 0, 0)])

    def test_load_default_file(self):
        self.write('words.csv', "Hund,dog\n")
        self.assertEqual(len(self.storage.load_dataset()), 1)

    def test_load_absolute_path(self):
        path = self.write('other.csv', "Hund,dog\n")
        self.assertEqual(self.storage.load_dataset(path).terms(), ['Hund'])

    def test_load_skips_short_and_blank_lines(self):
        self.write('words.csv', "Hund,dog,1/1\n\njust-a-word\nKatze,cat\n")
        dataset = self.storage.load_dataset('words.csv')
        self.assertEqual(dataset.terms(), ['Hund', 'Katze'])

    def test_malformed_accuracy_loads_as_zero(self):
        self.write('words.csv', "Hund,dog,x/y\nKatze,cat,3\nMaus,mouse\n")
        dataset = self.storage.load_dataset('words.csv')
        for term in ['Hund', 'Katze', 'Maus']:
            self.assertEqual(dataset.record_of(term), AccuracyRecord(0, 0))

    def test_semicolon_variant(self):
        self.write('words.csv', "Hund;dog\nKatze ; cat\n")
        dataset = self.storage.load_dataset('words.csv')
        self.assertEqual(dataset.rows(), [('Hund', 'dog', 0, 0), ('Katze', 'cat', 0, 0)])

    def test_explicit_delimiter(self):
        self.write('words.csv', "Hund;dog, the animal\n")
        self.storage.delimiter = ';'
        dataset = self.storage.load_dataset('words.csv')
        self.assertEqual(dataset.get('Hund').translation, 'dog, the animal')

    def test_duplicate_terms_keep_first(self):
        self.write('words.csv', "Hund,dog,1/1\nHund,hound,0/5\n")
        dataset = self.storage.load_dataset('words.csv')
        self.assertEqual(dataset.rows(), [('Hund', 'dog', 1, 1)])

    def test_missing_file(self):
        with self.assertRaises(DatasetNotFoundError):
            self.storage.load_dataset('missing.csv')

    def test_unreadable_file(self):
        self.write('words.csv', b"Hund,dog\n\xff\xfe\xfa,bad\n", mode='wb')
        with self.assertRaises(DatasetReadError):
            self.storage.load_dataset('words.csv')

    def test_save_format(self):
        dataset = Dataset()
        dataset.add(WordPair('Hund', 'dog'), AccuracyRecord(2, 2))
        dataset.add(WordPair('Katze', 'cat'))
        self.storage.save_dataset(dataset, 'out.csv')
        with open(os.path.join(self.tmp.name, 'out.csv'), encoding='utf-8') as f:
            self.assertEqual(f.read(), "Hund,dog,2/2\nKatze,cat,0/0\n")

    def test_save_replaces_whole_file(self):
        self.write('words.csv', "Hund,dog,0/0\nKatze,cat,0/0\nMaus,mouse,0/0\n")
        dataset = Dataset([WordPair('Hund', 'dog')])
        self.storage.save_dataset(dataset, 'words.csv')
        self.assertEqual(self.storage.load_dataset('words.csv').terms(), ['Hund'])
        self.assertEqual(os.listdir(self.tmp.name), ['words.csv'])

    def test_save_load_roundtrip(self):
        dataset = Dataset()
        dataset.add(WordPair('Hund', 'dog'), AccuracyRecord(3, 4))
        dataset.add(WordPair('Katze', 'cat'), AccuracyRecord(0, 2))
        dataset.add(WordPair('Größe', 'size'))
        self.storage.save_dataset(dataset, 'words.csv')
        loaded = self.storage.load_dataset('words.csv')
        self.assertEqual(sorted(loaded.rows()), sorted(dataset.rows()))

    def test_save_failure(self):
        dataset = Dataset([WordPair('Hund', 'dog')])
        with self.assertRaises(DatasetWriteError):
            self.storage.save_dataset(dataset, os.path.join(self.tmp.name, 'nope', 'words.csv'))

    @unittest.skipIf(os.name == 'nt', 'POSIX permissions')
    def test_save_keeps_file_mode(self):
        path = self.write('words.csv', "Hund,dog,0/0\n")
        os.chmod(path, 0o644)
        dataset = self.storage.load_dataset('words.csv')
        dataset.accuracy.record_attempt('Hund', True)
        self.storage.save_dataset(dataset, 'words.csv')
        self.assertEqual(stat.S_IMODE(os.stat(path).st_mode), 0o644)
        with open(path, encoding='utf-8') as f:
            self.assertEqual(f.read(), "Hund,dog,1/1\n")

    def test_in_data_dir(self):
        self.assertTrue(self.storage.in_data_dir('words.csv'))
        self.assertTrue(self.storage.in_data_dir(os.path.join(self.tmp.name, 'lists', 'a.csv')))
        self.assertFalse(self.storage.in_data_dir('../words.csv'))
        self.assertFalse(self.storage.in_data_dir(os.path.abspath(os.sep + 'etc/passwd')))

    def test_load_config_missing(self):
        self.assertEqual(self.storage.load_config(), {})

    def test_load_config(self):
        self.write('config.json', json.dumps({'selection_size': 10, 'direction': 'reverse'}))
        self.assertEqual(self.storage.load_config(), {'selection_size': 10, 'direction': 'reverse'})

    def test_load_config_invalid_json(self):
        self.write('config.json', '{not json')
        self.assertEqual(self.storage.load_config(), {})

    def test_load_config_not_an_object(self):
        self.write('config.json', '[3, "reverse"]')
        self.assertEqual(self.storage.load_config(), {})


if __name__ == '__main__':
    unittest.main()
