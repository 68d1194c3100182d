from pydantic import BaseModel


class MarkdownRequest(BaseModel):
    """Markdown source to render"""
    text: str


class MarkdownResponse(BaseModel):
    """Rendered HTML with CJK spacing applied"""
    html: str
