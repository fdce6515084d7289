"""Run the API with uvicorn: ``python -m bank_api``."""

import uvicorn

from bank_api.config import get_settings

settings = get_settings()

uvicorn.run(
    "bank_api.main:app",
    host=settings.HOST,
    port=settings.PORT,
    reload=settings.DEBUG,
)
