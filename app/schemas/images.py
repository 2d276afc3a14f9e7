from app.schemas.base import CamelModel


class ImageOut(CamelModel):
    data_url: str
