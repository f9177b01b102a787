"""Rendering: pure functions from a state snapshot to views and HTML."""

from html import escape

from pydantic import BaseModel, computed_field

from ..messages import get_message
from ..models import Failed, FittingState, Loading, Slot, Succeeded


class UploaderView(BaseModel):
    slot: Slot
    label: str
    icon: str
    accept: str
    preview_url: str | None = None

    @computed_field
    @property
    def has_image(self) -> bool:
        return self.preview_url is not None


class ResultPanelView(BaseModel):
    kind: str  # idle, loading, error, result
    title: str | None = None
    message: str | None = None
    image_src: str | None = None
    image_alt: str | None = None
    can_save: bool = False


class SessionView(BaseModel):
    uploaders: list[UploaderView]
    result: ResultPanelView
    can_try_on: bool
    is_loading: bool
    try_on_label: str


def render_result_panel(state: FittingState, locale: str = "ko") -> ResultPanelView:
    """Pick exactly one of the four panel states."""
    operation = state.operation
    if isinstance(operation, Loading):
        return ResultPanelView(kind="loading", message=get_message("loading", locale))
    if isinstance(operation, Failed):
        return ResultPanelView(
            kind="error",
            title=get_message("failed_title", locale),
            message=operation.message,
        )
    if isinstance(operation, Succeeded):
        return ResultPanelView(
            kind="result",
            image_src=operation.data_url,
            image_alt=get_message("result_alt", locale),
            can_save=True,
        )
    return ResultPanelView(
        kind="idle",
        title=get_message("idle_title", locale),
        message=get_message("idle_hint", locale),
    )


def render_session(
    state: FittingState,
    uploaders: list[UploaderView],
    locale: str = "ko",
) -> SessionView:
    return SessionView(
        uploaders=uploaders,
        result=render_result_panel(state, locale),
        can_try_on=state.can_try_on,
        is_loading=state.is_loading,
        try_on_label=get_message("generating" if state.is_loading else "try_on", locale),
    )


PAGE_STYLE = """
* { box-sizing: border-box; margin: 0; padding: 0; }
body { min-height: 100vh; background: #111827; color: #f3f4f6; font-family: system-ui, -apple-system, 'Segoe UI', 'Noto Sans KR', sans-serif; padding: 24px; display: flex; flex-direction: column; }
header { text-align: center; margin-bottom: 32px; }
header h1 { font-size: 44px; font-weight: 800; background: linear-gradient(90deg, #c084fc, #db2777); -webkit-background-clip: text; background-clip: text; color: transparent; }
header p { color: #9ca3af; margin-top: 8px; font-size: 18px; }
main { flex-grow: 1; display: grid; grid-template-columns: 1fr 1fr; gap: 32px; align-items: start; }
@media (max-width: 1024px) { main { grid-template-columns: 1fr; } }
.inputs { display: flex; flex-direction: column; gap: 32px; }
.garments { display: grid; grid-template-columns: 1fr 1fr; gap: 32px; }
.uploader { position: relative; background: rgba(31, 41, 55, .5); border-radius: 16px; padding: 24px; aspect-ratio: 1; display: flex; flex-direction: column; align-items: center; }
.uploader h2 { font-size: 22px; color: #d1d5db; margin-bottom: 16px; }
.uploader form.pick { width: 100%; flex-grow: 1; display: flex; }
.dropzone { width: 100%; border: 2px dashed #4b5563; border-radius: 12px; display: flex; flex-direction: column; justify-content: center; align-items: center; cursor: pointer; overflow: hidden; position: relative; }
.dropzone:hover { border-color: #c084fc; background: rgba(55, 65, 81, .5); }
.dropzone .icon { font-size: 48px; }
.dropzone img { width: 100%; height: 100%; object-fit: cover; }
.dropzone .change { position: absolute; background: rgba(255, 255, 255, .2); padding: 8px 16px; border-radius: 8px; }
.uploader form.clear { position: absolute; top: 32px; right: 32px; }
.uploader form.clear button { background: rgba(239, 68, 68, .7); color: #fff; border: 0; border-radius: 999px; width: 32px; height: 32px; cursor: pointer; font-size: 20px; }
.output { background: rgba(31, 41, 55, .5); border-radius: 16px; padding: 24px; min-height: 480px; display: flex; }
.panel { width: 100%; border: 2px dashed #4b5563; border-radius: 12px; display: flex; flex-direction: column; justify-content: center; align-items: center; text-align: center; position: relative; padding: 16px; }
.panel.error { color: #f87171; }
.panel.idle { color: #6b7280; }
.panel h3 { font-size: 20px; color: #d1d5db; }
.panel img { max-width: 100%; max-height: 100%; object-fit: contain; border-radius: 12px; }
.panel .save { position: absolute; bottom: 16px; right: 16px; background: #9333ea; color: #fff; text-decoration: none; font-weight: 600; padding: 8px 16px; border-radius: 8px; }
footer { margin-top: 32px; display: flex; justify-content: center; }
footer form { width: 100%; max-width: 28rem; }
footer button { width: 100%; padding: 16px 32px; font-size: 20px; font-weight: 700; border-radius: 999px; border: 0; color: #fff; background: linear-gradient(90deg, #a855f7, #ec4899); cursor: pointer; }
footer button:disabled { background: #374151; color: #6b7280; cursor: not-allowed; }
"""


def _render_uploader(view: UploaderView, locale: str) -> str:
    slot = escape(view.slot.value)
    if view.has_image:
        inner = (
            f'<img src="{escape(view.preview_url)}" alt="{escape(get_message("preview_alt", locale))}">'
            f'<span class="change">{escape(get_message("change", locale))}</span>'
        )
        clear_form = (
            f'<form class="clear" method="post" action="/clear/{slot}">'
            f'<button type="submit" aria-label="{escape(get_message("remove_image", locale))}">&times;</button>'
            f'</form>'
        )
    else:
        inner = (
            f'<span class="icon">{escape(view.icon)}</span>'
            f'<p>{escape(get_message("click_to_upload", locale))}</p>'
        )
        clear_form = ""

    return f"""
    <section class="uploader" id="uploader-{slot}">
      <h2>{escape(view.label)}</h2>
      <form class="pick" method="post" action="/upload/{slot}" enctype="multipart/form-data">
        <label class="dropzone">
          {inner}
          <input type="file" name="file" accept="{escape(view.accept)}" hidden onchange="this.form.submit()">
        </label>
      </form>
      {clear_form}
    </section>"""


def _render_panel(view: ResultPanelView, locale: str) -> str:
    if view.kind == "loading":
        body = f'<p>⏳</p><p>{escape(view.message or "")}</p>'
    elif view.kind == "error":
        body = (
            f'<p>⚠️</p><p><strong>{escape(view.title or "")}</strong></p>'
            f'<p>{escape(view.message or "")}</p>'
        )
    elif view.kind == "result":
        body = (
            f'<img src="{escape(view.image_src or "")}" alt="{escape(view.image_alt or "")}">'
            f'<a class="save" href="/save" aria-label="{escape(get_message("save_label", locale))}">'
            f'⬇ {escape(get_message("save", locale))}</a>'
        )
    else:
        body = f'<p>✨</p><h3>{escape(view.title or "")}</h3><p>{escape(view.message or "")}</p>'
    return f'<div class="panel {escape(view.kind)}">{body}</div>'


def render_page(view: SessionView, locale: str = "ko") -> str:
    """Render the whole single-page UI."""
    uploaders = {u.slot: u for u in view.uploaders}
    person = _render_uploader(uploaders[Slot.PERSON], locale)
    garments = "".join(
        _render_uploader(uploaders[slot], locale) for slot in (Slot.TOP, Slot.BOTTOM)
    )
    disabled = "" if view.can_try_on else " disabled"

    return f"""<!DOCTYPE html>
<html lang="{escape(locale)}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(get_message("title", locale))}</title>
  <style>{PAGE_STYLE}</style>
</head>
<body>
  <header>
    <h1>{escape(get_message("title", locale))}</h1>
    <p>{escape(get_message("subtitle", locale))}</p>
  </header>
  <main>
    <div class="inputs">
      {person}
      <div class="garments">{garments}</div>
    </div>
    <div class="output">{_render_panel(view.result, locale)}</div>
  </main>
  <footer>
    <form method="post" action="/tryon">
      <button type="submit"{disabled}>{escape(view.try_on_label)}</button>
    </form>
  </footer>
</body>
</html>
"""
