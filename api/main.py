from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from core import db, schema, settings
from core.errors import malformed_request_handler
from core.logging import configure_logging
from person import router as person_router
from task import router as task_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # One pool per process, handed to handlers through db.get_pool.
    pool = await db.create_pool()
    try:
        await schema.ensure_schema(pool)
        if settings.seed_sample_data():
            await schema.seed_sample_data(pool)
        app.state.pool = pool
        yield
    finally:
        app.state.pool = None
        await db.close_pool(pool)


app = FastAPI(title="todo-api", lifespan=lifespan)

# Undecodable bodies and malformed ids are client errors, not 422s.
app.add_exception_handler(RequestValidationError, malformed_request_handler)

app.include_router(person_router.router, tags=["person"])
app.include_router(task_router.router, tags=["task"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


def run() -> None:
    uvicorn.run("main:app", host=settings.host(), port=settings.port())


if __name__ == "__main__":
    run()
