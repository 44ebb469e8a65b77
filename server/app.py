"""FastAPI server for vocab drill application."""

import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

from core.config import DEFAULT_DIRECTION
from core.errors import PreconditionError
from core.interfaces import Presenter
from core.session import DrillSession

from server.file_storage import FileStorage

logger = logging.getLogger(__name__)


# Pydantic models for API
class LoadRequest(BaseModel):
    source: Optional[str] = None


class SelectRequest(BaseModel):
    k: Optional[int] = None


class WrittenAnswerRequest(BaseModel):
    answer: Optional[str] = None  # None = user cancelled


class ChoiceRequest(BaseModel):
    choice: str


class CorrectionRequest(BaseModel):
    text: Optional[str] = None


class DirectionRequest(BaseModel):
    direction: str = DEFAULT_DIRECTION


class QuestionResponse(BaseModel):
    term: str
    prompt: str
    modality: str
    options: list[str]
    messages: list[dict]


class AnswerResponse(BaseModel):
    term: str
    answer: Optional[str]
    correct: bool
    expected: str
    needs_correction: bool
    removed: bool
    remaining: int
    complete: bool
    messages: list[dict]


class CorrectionResponse(BaseModel):
    accepted: bool
    expected: str
    messages: list[dict]


class BufferedPresenter(Presenter):
    """Collects presenter output until the current request returns it."""

    def __init__(self):
        self.messages = []

    def show_prompt(self, text: str) -> None:
        self.messages.append({'type': 'prompt', 'text': text})

    def show_options(self, options: list[str]) -> None:
        self.messages.append({'type': 'options', 'options': list(options)})

    def show_report(self, text: str) -> None:
        self.messages.append({'type': 'report', 'text': text})

    def notify_error(self, message: str) -> None:
        self.messages.append({'type': 'error', 'text': message})

    def drain(self) -> list[dict]:
        messages, self.messages = self.messages, []
        return messages


# Global state: one logical user, one session
storage: FileStorage = None
presenter: BufferedPresenter = None
session: DrillSession = None


app = FastAPI(title="Vocab Drill API", description="Vocabulary drill rounds over a word list")


def get_session() -> DrillSession:
    if session is None:
        raise HTTPException(status_code=503, detail="Session not initialized")
    return session


def drain_messages() -> list[dict]:
    return presenter.drain() if presenter else []


@app.on_event("startup")
async def startup():
    """Initialize storage and the drill session, then load the word list."""
    global storage, presenter, session

    storage = FileStorage()
    config = storage.load_config()
    storage.delimiter = config.get('delimiter')
    presenter = BufferedPresenter()
    session = DrillSession.from_config(storage, presenter, config)
    if session.load():
        session.select()
    for message in presenter.drain():
        logger.info(f"Startup: {message.get('text', message)}")


@app.get("/")
async def root():
    return {"status": "ok", "service": "vocab-drill"}


@app.get("/api/status")
async def get_status():
    return {**get_session().get_status(), "messages": drain_messages()}


@app.post("/api/load")
async def load_dataset(request: LoadRequest):
    """(Re)load the word list. A failed load keeps the current words."""
    drill = get_session()
    if request.source and not storage.in_data_dir(request.source):
        raise HTTPException(status_code=400, detail="Word lists must live in the data directory")
    loaded = drill.load(request.source)
    return {"loaded": loaded, "word_count": len(drill.dataset), "messages": drain_messages()}


@app.get("/api/words")
async def get_words():
    """All words with their accuracy, in file order."""
    words = get_session().word_stats()
    return {"total": len(words), "words": words}


@app.post("/api/select")
async def select_words(request: SelectRequest):
    """Select the weakest words for the next round."""
    drill = get_session()
    selection = drill.select(request.k)
    return {
        "selection": [
            {"term": pair.term, "translation": pair.translation,
             "accuracy": drill.dataset.accuracy.accuracy_of(pair.term)}
            for pair in selection
        ],
        "messages": drain_messages()
    }


@app.post("/api/round/start")
async def start_round():
    drill = get_session()
    started = drill.start_round()
    messages = drain_messages()
    if not started:
        raise HTTPException(status_code=409, detail=messages[-1]['text'] if messages else "Cannot start round")
    return {"started": True, "pool": drill.get_status()['pool'], "messages": messages}


@app.post("/api/round/abandon")
async def abandon_round():
    get_session().abandon_round()
    return {"abandoned": True, "messages": drain_messages()}


@app.get("/api/question", response_model=QuestionResponse)
async def get_question():
    """Current question of the round (asks a new one if none is pending)."""
    try:
        question = get_session().next_question()
    except PreconditionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return QuestionResponse(**question.to_dict(), messages=drain_messages())


@app.post("/api/answer/written", response_model=AnswerResponse)
async def submit_written_answer(request: WrittenAnswerRequest):
    try:
        result = get_session().submit_written_answer(request.answer)
    except PreconditionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    logger.info(f"Written answer for {result['term']}: correct={result['correct']}")
    return AnswerResponse(**result, messages=drain_messages())


@app.post("/api/answer/choice", response_model=AnswerResponse)
async def submit_choice(request: ChoiceRequest):
    try:
        result = get_session().submit_choice(request.choice)
    except PreconditionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    logger.info(f"Choice for {result['term']}: correct={result['correct']}")
    return AnswerResponse(**result, messages=drain_messages())


@app.post("/api/answer/correction", response_model=CorrectionResponse)
async def submit_correction(request: CorrectionRequest):
    try:
        result = get_session().submit_correction(request.text)
    except PreconditionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return CorrectionResponse(**result, messages=drain_messages())


@app.get("/api/report")
async def get_report():
    """Accuracy report over the whole word list."""
    drill = get_session()
    return {"report": drill.report(), "words": drill.word_stats()}


@app.post("/api/direction")
async def set_direction(request: DirectionRequest):
    try:
        get_session().set_direction(request.direction)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PreconditionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"direction": request.direction}


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
