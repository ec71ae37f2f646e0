"""Document viewer state: zoom, rotation, paging and view mode."""

from urllib.parse import quote

from src.models.schemas import DocumentType

MIN_ZOOM = 25
MAX_ZOOM = 300
ZOOM_STEP = 25
DEFAULT_ZOOM = 100
ROTATION_STEP = 90
SELECTION_PREVIEW_LENGTH = 150

TEXT_TYPES = (DocumentType.WORD, DocumentType.GOOGLE_DOC, DocumentType.TEXT)


class ViewerState:
    """Per-page viewer settings. Reset whenever a new document loads."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.zoom: int = DEFAULT_ZOOM
        self.rotation: int = 0
        self.page: int = 1
        self.total_pages: int = 1
        self.view_mode: str = "visual"
        self.is_fullscreen: bool = False

    def zoom_in(self) -> None:
        self.zoom = min(self.zoom + ZOOM_STEP, MAX_ZOOM)

    def zoom_out(self) -> None:
        self.zoom = max(self.zoom - ZOOM_STEP, MIN_ZOOM)

    def reset_zoom(self) -> None:
        self.zoom = DEFAULT_ZOOM

    def rotate(self) -> None:
        self.rotation = (self.rotation + ROTATION_STEP) % 360

    def next_page(self) -> None:
        self.page = min(self.page + 1, self.total_pages)

    def previous_page(self) -> None:
        self.page = max(self.page - 1, 1)

    @property
    def transform(self) -> str:
        return f"scale({self.zoom / 100}) rotate({self.rotation}deg)"


def proxy_url(api_base_url: str, document_url: str) -> str:
    """URL of the document served through the API's proxy endpoint."""
    return f"{api_base_url.rstrip('/')}/api/documents/proxy?url={quote(document_url, safe='')}"


def pdf_frame_url(api_base_url: str, document_url: str, viewer: ViewerState) -> str:
    """Proxied PDF URL with open parameters for the browser's PDF viewer."""
    return f"{proxy_url(api_base_url, document_url)}#page={viewer.page}&zoom={viewer.zoom}"


def selection_preview(text: str) -> str:
    if len(text) > SELECTION_PREVIEW_LENGTH:
        return f"{text[:SELECTION_PREVIEW_LENGTH]}..."
    return text
