import uvicorn

from blog_api.config import settings
from blog_api.main import create_app
from blog_api.middleware.logging import configure_logging

configure_logging(settings.log_level, json_format=settings.environment == "production")

app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=3000, reload=settings.debug)
