"""
Mooder Recommendation API
추천 라우터
"""

import logging
from fastapi import APIRouter, Request, HTTPException

from ..schemas.recommend import QuizAnswers, RecommendResponse
from ..schemas.common import ErrorResponse
from ..core.errors import ConfigurationError, NoResultsError, UpstreamError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["recommend"])


@router.post(
    "/recommend",
    response_model=RecommendResponse,
    responses={
        404: {"model": ErrorResponse, "description": "No (non-blocked) tracks found"},
        500: {"model": ErrorResponse, "description": "Configuration or upstream error"}
    }
)
def recommend(request: Request, answers: QuizAnswers) -> RecommendResponse:
    """
    퀴즈 응답으로 한 곡 추천

    - 장르 > (명시적 요청 시) 우크라이나 신호 > popularity 순 정렬
    - 상위 5곡 중 랜덤 선택 (같은 입력이라도 매번 다를 수 있음)
    """
    state = request.app.state

    if state.engine is None:
        raise HTTPException(
            status_code=500,
            detail=getattr(state, "engine_error", None) or "Recommendation engine not initialized"
        )

    try:
        result = state.engine.recommend(answers)
    except NoResultsError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (ConfigurationError, UpstreamError) as e:
        logger.error(f"Recommend API error: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Recommendation error: {e}")
        raise HTTPException(status_code=500, detail="Internal error")

    track = result["track"]
    return RecommendResponse(
        id=track.id,
        title=track.title or "Unknown title",
        artist=track.artist_line,
        spotify_url=track.spotify_url
    )
