# api/routes.py
from fastapi import APIRouter, HTTPException
from ..agents.analyst import Analyst, InvalidInput, samples_from_pairs
from ..schemas import ClassifyRequest, SCHEMA_VERSION
from ..utils.logger import get_logger

log = get_logger("API")

router = APIRouter()

@router.get("/healthz")
async def health_check():
    log.info("Health check request received")
    return {
        "status": "healthy",
        "service": "bigoprof",
        "version": SCHEMA_VERSION
    }

@router.post("/classify")
def classify(input_data: ClassifyRequest):
    log.info(f"=== Classify Request Received ===")
    log.info(f"Request data: {input_data.model_dump_json()}")

    try:
        result = Analyst().run(samples_from_pairs(input_data.samples))
    except InvalidInput as e:
        log.warning(f"Rejected samples ({e.code}): {e}")
        raise HTTPException(status_code=422, detail={"code": e.code, "message": str(e)})

    log.info(f"Classification completed: {result.complexity_class.value}")
    return result.to_record()
