import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, BackgroundTasks, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from markov import (
    GenerationExhausted,
    InvalidCorpusItem,
    Markov,
    ModelNotBuilt,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Markov sentence generator")

# -----------------------
# Default model
# -----------------------
DEFAULT_STATE_SIZE = 2
DEFAULT_CORPUS = [
    "The Count of Monte Cristo is a novel written by Alexandre Dumas.",
    "The Count of Monte Cristo tells the story of Edmond Dantes.",
    "It tells the story of a sailor who is falsely imprisoned.",
    "It is a novel about hope, justice and revenge.",
]

_state: Dict[str, Any] = {"markov": None, "rebuilding": False}


def build_markov(items, state_size: int = DEFAULT_STATE_SIZE) -> Markov:
    """Build a fresh model; the caller publishes it once it is complete."""
    markov = Markov(items, state_size=state_size)
    markov.build_corpus_sync()
    return markov


def publish(markov: Markov):
    _state["markov"] = markov


def current_markov() -> Markov:
    markov = _state["markov"]
    if markov is None:
        raise ModelNotBuilt()
    return markov


publish(build_markov(DEFAULT_CORPUS))

# -----------------------
# Request schemas
# -----------------------
class CorpusItem(BaseModel):
    # extra fields are kept as item metadata and come back in refs
    model_config = ConfigDict(extra="allow")

    string: str

class CorpusRequest(BaseModel):
    items: List[Union[str, CorpusItem]] = Field(..., min_length=1)
    state_size: int = Field(DEFAULT_STATE_SIZE, ge=1, le=10)

    # rebuild after the response is sent
    background: bool = False

class GenerateRequest(BaseModel):
    max_length: Optional[int] = Field(None, ge=0)
    min_words: Optional[int] = Field(None, ge=0)
    max_words: Optional[int] = Field(None, ge=0)
    min_score: Optional[int] = None
    min_score_per_word: Optional[int] = None
    max_tries: Optional[int] = Field(None, ge=1, le=100000)

    def options(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

class GenerateResponse(BaseModel):
    string: str
    score: int
    score_per_word: int
    refs: List[Dict[str, Any]]

# -----------------------
# Root & status
# -----------------------
@app.get("/")
def root():
    return {"status": "Markov sentence generator active"}

@app.get("/corpus/status")
def corpus_status():
    markov = _state["markov"]
    if markov is None or not markov.is_built:
        return {"built": False, "rebuilding": _state["rebuilding"]}

    model = markov.model
    return {
        "built": True,
        "rebuilding": _state["rebuilding"],
        "items": len(markov.data),
        "state_size": model.state_size,
        "states": len(model.corpus),
        "transitions": model.transition_count,
        "start_states": len(model.start_words),
        "end_states": len(model.end_words),
    }

# -----------------------
# Corpus
# -----------------------
def _request_items(req: CorpusRequest) -> List[Any]:
    return [item if isinstance(item, str) else item.model_dump() for item in req.items]

@app.post("/corpus")
def replace_corpus(req: CorpusRequest, background_tasks: BackgroundTasks):
    items = _request_items(req)

    if req.background:
        def run():
            _state["rebuilding"] = True
            try:
                publish(build_markov(items, req.state_size))
                logger.info("Background rebuild complete (%d items)", len(items))
            except InvalidCorpusItem:
                logger.exception("Background rebuild failed")
            finally:
                _state["rebuilding"] = False

        background_tasks.add_task(run)
        return {"status": "started", "items": len(items), "state_size": req.state_size}

    try:
        markov = build_markov(items, req.state_size)
    except InvalidCorpusItem as e:
        raise HTTPException(status_code=400, detail=str(e))

    publish(markov)
    return {
        "status": "built",
        "items": len(items),
        "state_size": req.state_size,
        "states": len(markov.corpus),
    }

# -----------------------
# Generation
# -----------------------
@app.post("/generate", response_model=GenerateResponse)
def generate(req: GenerateRequest):
    try:
        result = current_markov().generate_sentence_sync(**req.options())
    except ModelNotBuilt as e:
        raise HTTPException(status_code=409, detail=str(e))
    except GenerationExhausted as e:
        raise HTTPException(status_code=422, detail=str(e))

    return result.to_dict()
