# assignment_eval/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from assignment_eval import models  # noqa
from assignment_eval.api.v1.endpoints import assignments, feedback, health, submissions
from assignment_eval.core.config import settings
from assignment_eval.core.logging_config import setup_logging
from assignment_eval.db.base import Base
from assignment_eval.db.session import engine

setup_logging()

app = FastAPI(title=settings.PROJECT_NAME)

origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)


app.include_router(assignments.router, prefix="/api/v1")
app.include_router(submissions.router, prefix="/api/v1")
app.include_router(feedback.router, prefix="/api/v1")
app.include_router(health.router, prefix="/api/v1")
