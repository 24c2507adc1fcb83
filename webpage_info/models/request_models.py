from pydantic import BaseModel


class ParseRequest(BaseModel):
    html: str
    base_url: str | None = None
