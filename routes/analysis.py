"""
Route handler for recording answered questions.
"""
from fastapi import APIRouter
from models.api_models import Analysis
from services.similarity_search import SimilaritySearchService
from config import Config
from utils.logger import app_logger

router = APIRouter()


@router.post("/api/analysis")
async def analysis(record: Analysis):
    """Store the question and the bot's answer in the analysis table."""
    try:
        service = SimilaritySearchService(Config.pipeline_settings())
        await service.insert_analysis(
            question=record.userMessage.content,
            answer=record.botMessage.content
        )
        return "success"
    except Exception as e:
        app_logger.error(f"[Analysis] {e}")
        return "error"
