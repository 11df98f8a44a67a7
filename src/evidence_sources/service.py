"""Request/response surface for the search and card-cutting operations."""

import logging
from typing import Any

from evidence_sources.card.cutter import CutCardRequest
from evidence_sources.config.factory import create_card_cutter, create_pipeline
from evidence_sources.config.models import EvidenceConfig
from evidence_sources.errors import ClientInputError, ConfigurationError, ProviderError
from evidence_sources.run_logger import RunLogger

logger = logging.getLogger(__name__)

INTERNAL_ERROR = {"error": "Internal server error"}


def _optional_str(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    return value if isinstance(value, str) and value else None


class SearchService:
    """Map JSON-style payloads onto the pipeline and card cutter.

    Every method returns ``(status, body)``: 200 on success, 400 for client
    input errors, 500 for configuration errors and unexpected faults, 502
    when the card-cutting oracle fails. Components are built per request, so
    credentials added to the environment take effect without a restart.

    Args:
        config: Root configuration.
        run_logger: Optional RunLogger passed to each pipeline run.
    """

    def __init__(self, config: EvidenceConfig, run_logger: RunLogger | None = None) -> None:
        self._config = config
        self._run_logger = run_logger

    async def search(self, payload: dict[str, Any]) -> tuple[int, dict[str, Any]]:
        """Handle ``{"query": str}``; respond with a SearchResponse body."""
        query = payload.get("query") if isinstance(payload, dict) else None
        try:
            if not isinstance(query, str) or not query.strip():
                raise ClientInputError("Query parameter is required")
            pipeline = create_pipeline(self._config.pipeline, run_logger=self._run_logger)
            response, _usage = await pipeline.run(query)
        except ClientInputError as e:
            return (400, e.to_dict())
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e)
            return (500, e.to_dict())
        except Exception:
            logger.exception("Error in search operation")
            return (500, dict(INTERNAL_ERROR))
        return (200, response.to_dict())

    async def cut_card(self, payload: dict[str, Any]) -> tuple[int, dict[str, Any]]:
        """Handle ``{content, title, argument, author?, publishDate?, url?}``."""
        try:
            if not isinstance(payload, dict):
                raise ClientInputError("Content and argument are required")
            request = CutCardRequest(
                content=payload.get("content") or "",
                title=payload.get("title") or "",
                argument=payload.get("argument") or "",
                author=_optional_str(payload, "author"),
                publish_date=_optional_str(payload, "publishDate"),
                url=_optional_str(payload, "url"),
            )
            if not request.content or not request.argument:
                raise ClientInputError("Content and argument are required")
            cutter = create_card_cutter(self._config.card_cutter)
            card, _usage = await cutter.cut(request)
        except ClientInputError as e:
            return (400, e.to_dict())
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e)
            return (500, e.to_dict())
        except ProviderError as e:
            logger.error("Card cutting failed: %s", e.details.get("cause", e))
            return (502, e.to_dict())
        except Exception:
            logger.exception("Error in cut-card operation")
            return (500, dict(INTERNAL_ERROR))
        return (200, card.to_dict())
