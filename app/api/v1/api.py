from fastapi import APIRouter
from loguru import logger
from app.core.config import settings

from app.api.v1.grades import router as grades_router
from app.api.v1.subjects import router as subjects_router
from app.api.v1.lessons import router as lessons_router
from app.api.v1.topics import router as topics_router
from app.api.v1.smart_notes import router as smart_notes_router
from app.api.v1.questions import router as questions_router
from app.api.v1.admin.menu_config import router as menu_config_router

api_router = APIRouter()

# Include routers
api_router.include_router(grades_router, prefix="/grades", tags=["grades"])
api_router.include_router(subjects_router, prefix="/subjects", tags=["subjects"])
api_router.include_router(lessons_router, prefix="/lessons", tags=["lessons"])
api_router.include_router(topics_router, prefix="/tutor", tags=["topics"])
api_router.include_router(smart_notes_router, prefix="/note", tags=["smart-notes"])
api_router.include_router(questions_router, prefix="/mcq", tags=["mcq"])
api_router.include_router(
    menu_config_router, prefix="/admin/menu-config", tags=["menu-config"]
)


@api_router.get("/health")
def health_check():
    logger.info("health_check_called")
    return {"status": "healthy", "version": settings.VERSION}
