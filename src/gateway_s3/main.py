"""FastAPI application entry point."""

from ddtrace import patch_all
from fastapi import FastAPI

from gateway_s3.routes import files_router, health_router

patch_all()

app = FastAPI(title="Gateway S3")
app.include_router(health_router)
app.include_router(files_router)
