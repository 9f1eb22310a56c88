"""Main FastAPI application."""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workout_scheduler_api.api.routes import router
from workout_scheduler_api.clients.http_services import HttpPlanServices
from workout_scheduler_api.config import settings
from workout_scheduler_api.services.plan_controller import PlanController
from workout_scheduler_api.services.plan_store import JsonFilePlanStore


def build_controller() -> PlanController:
    """Controller wired to the prediction API and, if configured, a plan file."""
    services = HttpPlanServices()
    store = JsonFilePlanStore(settings.PLAN_STORE_PATH) if settings.PLAN_STORE_PATH else None
    return PlanController(services, services, services, store=store)


def create_app(controller: Optional[PlanController] = None) -> FastAPI:
    controller = controller or build_controller()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        controller.resume_saved_plan()
        controller.sweeper.start()
        try:
            yield
        finally:
            await controller.sweeper.stop()

    app = FastAPI(title="Workout Scheduler API", lifespan=lifespan)
    app.state.controller = controller

    # Configure CORS to allow requests from the UI
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:3001"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


app = create_app()
