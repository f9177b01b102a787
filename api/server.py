"""FastAPI server for AI Fashion Fitting.

Serves the single-page UI and a JSON API over the same session:
- person / top / bottom: uploaded images (PNG, JPEG or WEBP)
- tryon: composites the garments onto the person with Gemini
- save: downloads the result as ai-fitting-<epoch-ms>.png
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from ai_fitting.config import FittingConfig, load_config
from ai_fitting.errors import UnsupportedImageTypeError
from ai_fitting.messages import get_message
from ai_fitting.models import ImageSelection, Slot, detect_mime_type, is_accepted
from ai_fitting.models.download import Download
from ai_fitting.services import FittingGenerationService
from ai_fitting.session import FittingSession, SessionStore
from ai_fitting.ui import render_page

logger = logging.getLogger(__name__)

SESSION_COOKIE = "fitting_session"


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Release every preview handle on shutdown
    if _sessions is not None:
        _sessions.close_all()


app = FastAPI(
    title="AI Fitting API",
    description="Virtual try-on of tops and bottoms using Gemini image generation",
    version="1.0.0",
    lifespan=lifespan,
)


# Initialized on first request
_config: FittingConfig | None = None
_service: FittingGenerationService | None = None
_sessions: SessionStore | None = None


def get_config() -> FittingConfig:
    """Get or load the configuration (once per process)."""
    global _config
    if _config is None:
        _config = load_config()  # Loads from .env automatically via pydantic-settings
    return _config


def get_service() -> FittingGenerationService:
    """Get or create the generation service instance."""
    global _service
    if _service is None:
        _service = FittingGenerationService(get_config())
    return _service


def get_sessions() -> SessionStore:
    """Get or create the session store, sized from the server config."""
    global _sessions
    if _sessions is None:
        server_config = get_config().server
        _sessions = SessionStore(
            max_sessions=server_config.max_sessions,
            idle_timeout=server_config.session_idle_timeout,
        )
    return _sessions


def find_session(request: Request) -> FittingSession | None:
    """Find the caller's session by cookie without creating one."""
    return get_sessions().get(request.cookies.get(SESSION_COOKIE))


def get_session(request: Request) -> tuple[str, FittingSession]:
    """Find the caller's session by cookie, creating one if needed."""
    session_id = request.cookies.get(SESSION_COOKIE)
    session = find_session(request)
    if session is None:
        session_id = uuid.uuid4().hex
        session = FittingSession(get_service(), locale=get_config().locale)
        get_sessions().add(session_id, session)
        logger.info("Created session %s", session_id)
    return session_id, session


def _blank_session() -> FittingSession:
    """An unstored session, for showing the empty page to a new visitor."""
    return FittingSession(get_service(), locale=get_config().locale)


def _with_cookie(response: Response, session_id: str) -> Response:
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


def _view_response(session_id: str, session: FittingSession) -> Response:
    return _with_cookie(JSONResponse(session.view().model_dump(mode="json")), session_id)


def _back_to_page(session_id: str | None = None) -> Response:
    response = RedirectResponse("/", status_code=303)
    if session_id is None:
        return response
    return _with_cookie(response, session_id)


def _download_response(download: Download) -> Response:
    return Response(
        content=download.data,
        media_type=download.media_type,
        headers={"Content-Disposition": download.content_disposition},
    )


async def read_upload(file: UploadFile | None, locale: str = "ko") -> ImageSelection | None:
    """Turn an uploaded file into a selection. An empty upload means no file."""
    if file is None:
        return None
    data = await file.read()
    if not data:
        return None

    mime_type = file.content_type
    if not is_accepted(mime_type):
        mime_type = detect_mime_type(data, file.filename)
    if not is_accepted(mime_type):
        raise UnsupportedImageTypeError(get_message("unsupported_type", locale))

    return ImageSelection(data=data, mime_type=mime_type, filename=file.filename or None)


@app.get("/health")
async def health():
    """Health check with credential status."""
    configured = get_config().has_api_key
    return {
        "status": "ok" if configured else "degraded",
        "credential": "configured" if configured else "missing",
    }


# --- Page -------------------------------------------------------------------

@app.get("/", response_class=HTMLResponse)
async def page(request: Request):
    """Serve the fitting page. A session starts with the first upload."""
    session = find_session(request) or _blank_session()
    return HTMLResponse(render_page(session.view(), session.locale))


@app.post("/upload/{slot}")
async def upload_form(slot: Slot, request: Request, file: UploadFile | None = File(None)):
    session_id, session = get_session(request)
    try:
        selection = await read_upload(file, session.locale)
    except UnsupportedImageTypeError as e:
        logger.warning("Rejected %s upload: %s", slot.value, file.content_type)
        session.controller.reject_input(e)
    else:
        session.uploader(slot).select(selection)
    return _back_to_page(session_id)


@app.post("/clear/{slot}")
async def clear_form(slot: Slot, request: Request):
    session_id, session = get_session(request)
    session.uploader(slot).clear()
    return _back_to_page(session_id)


@app.post("/tryon")
async def tryon_form(request: Request):
    session_id, session = get_session(request)
    await session.controller.try_on()
    return _back_to_page(session_id)


@app.get("/save")
async def save_form(request: Request):
    session = find_session(request)
    download = session.controller.save() if session is not None else None
    if download is None:
        return _back_to_page()
    return _download_response(download)


@app.get("/previews/{handle}")
async def preview(handle: str, request: Request):
    """Serve a preview image while its handle is alive."""
    session = find_session(request)
    selection = session.previews.get(handle) if session is not None else None
    if selection is None:
        raise HTTPException(status_code=404, detail="Preview not found")
    return Response(content=selection.data, media_type=selection.mime_type)


# --- JSON API ---------------------------------------------------------------

@app.get("/api/state")
async def get_state(request: Request):
    session = find_session(request) or _blank_session()
    return JSONResponse(session.view().model_dump(mode="json"))


@app.post("/api/uploads/{slot}")
async def upload_image(slot: Slot, request: Request, file: UploadFile = File(...)):
    session_id, session = get_session(request)
    try:
        selection = await read_upload(file, session.locale)
    except UnsupportedImageTypeError as e:
        raise HTTPException(status_code=415, detail=str(e))
    session.uploader(slot).select(selection)
    return _view_response(session_id, session)


@app.delete("/api/uploads/{slot}")
async def clear_image(slot: Slot, request: Request):
    session_id, session = get_session(request)
    session.uploader(slot).clear()
    return _view_response(session_id, session)


@app.post("/api/tryon")
async def generate_tryon(request: Request):
    """Run a fitting with the current selections.

    Failures are reported in the returned view's result panel, not as HTTP errors.
    """
    session_id, session = get_session(request)
    await session.controller.try_on()
    return _view_response(session_id, session)


@app.get("/api/result")
async def download_result(request: Request):
    session = find_session(request)
    download = session.controller.save() if session is not None else None
    if download is None:
        raise HTTPException(status_code=404, detail="No result to save")
    return _download_response(download)


@app.delete("/api/session")
async def end_session(request: Request):
    """Tear down the caller's session and release its previews."""
    get_sessions().remove(request.cookies.get(SESSION_COOKIE))
    response = JSONResponse({"status": "closed"})
    response.delete_cookie(SESSION_COOKIE)
    return response


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s - %(message)s",
    )
    config = get_config()
    logger.info("Serving AI Fitting on %s", config.server.base_url)
    uvicorn.run(app, host=config.server.host, port=config.server.port)
