from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.database import dispose_engine, init_engine, initialize_database
from app.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database pool at startup and release it on shutdown."""

    engine = init_engine(get_settings())
    initialize_database(engine)
    yield
    dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="GPS UTM notifications", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
