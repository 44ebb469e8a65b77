"""Configuration constants for the vocab drill application."""

DEFAULT_DATASET_FILE = 'words.csv'
CONFIG_FILE = '~/.config/vocab-drill/config.json'

# Dataset file format
DATASET_DELIMITER = ','      # term,translation,correct/attempted
MINIMAL_DELIMITER = ';'      # term;translation (no accuracy field)
MIN_RECORD_FIELDS = 2

# Selection
BASIC_SELECTION_SIZE = 3
EXTENDED_SELECTION_SIZE = 10
DEFAULT_SELECTION_SIZE = BASIC_SELECTION_SIZE
SELECTION_PRESETS = {
    'basic': BASIC_SELECTION_SIZE,
    'extended': EXTENDED_SELECTION_SIZE
}

# Round progression
REQUIRED_CORRECT_PER_ROUND = 2  # Correct answers needed to clear a word from the pool
OPTION_COUNT = 4                # Options shown in multiple-choice questions

# Quiz direction: 'normal' (term -> translation) or 'reverse' (translation -> term)
DIRECTIONS = ('normal', 'reverse')
DEFAULT_DIRECTION = 'normal'

# Question modalities
WRITTEN = 'written'
MULTIPLE_CHOICE = 'multiple_choice'

# Accuracy report
REPORT_PRECISION = 2
