import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from ..core.translator_client import TranslatorClient
from ..deps import get_db, get_translator

router = APIRouter()
logger = logging.getLogger("recipebook.ready")


@router.get("/ready")
def ready(
    db: Session = Depends(get_db),
    translator: TranslatorClient = Depends(get_translator),
):
    db_ok = False
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except Exception as e:
        logger.warning(f"Readiness database check failed: {e}")
    return {"ok": True, "db_ok": db_ok, "translation": translator.is_available()}
