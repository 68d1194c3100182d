from fastapi import APIRouter

from file_index.schemas.markdown import MarkdownRequest, MarkdownResponse
from file_index.services.spacing import render_markdown

router = APIRouter(prefix="/api/markdown", tags=["markdown"])


@router.post("", response_model=MarkdownResponse)
async def post_markdown(request: MarkdownRequest):
    """
    Render markdown to HTML with CJK/Latin spacing applied
    """
    return MarkdownResponse(html=render_markdown(request.text))
