from pydantic import BaseModel


class LogFileInfo(BaseModel):
    filename: str
    path: str
    size: int       # bytes
    date: str       # YYYY-MM-DD from the filename
