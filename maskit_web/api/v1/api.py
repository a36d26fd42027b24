from fastapi import APIRouter
from .process import router as process_router
from .render import router as render_router
from .export import router as export_router

router = APIRouter()

# Include all API routes
router.include_router(process_router, prefix="/process", tags=["process"])
router.include_router(render_router, prefix="/render", tags=["render"])
router.include_router(export_router, prefix="/export", tags=["export"])
