"""
PR Review Bot entry point

GitHub Actions 스텝에서 실행된다. 설정과 이벤트를 읽고 리뷰를 실행한 뒤
프로세스 종료 코드를 반환한다.
"""

import logging
import sys
from typing import Optional

from .config import AppConfig, load_config, setup_logging
from .models.event import load_event
from .review.orchestrator import ReviewOrchestrator


logger = logging.getLogger(__name__)


def run(config: AppConfig) -> int:
    """설정으로 리뷰 1회 실행. 정상 종료(리뷰 없음/미지원 이벤트 포함)는 0"""
    event = load_event(config.github.event_path)
    orchestrator = ReviewOrchestrator.from_config(config)
    result = orchestrator.run(event)
    logger.info(f"Review run finished: state={result.state.value} comments={result.total_comments}")
    return 0


def main(config: Optional[AppConfig] = None) -> int:
    """
    Process entry point.

    Any uncaught error is logged and turned into exit status 1.
    """
    try:
        config = config or load_config()
        setup_logging(config.logging)
        config.validate()
        return run(config)
    except Exception:
        logger.exception("Error:")
        return 1


if __name__ == "__main__":
    sys.exit(main())
