"""
Quote catalog.
Read-only after construction, so lookups need no locking.
"""

from typing import Any, Dict, Iterable, List, Optional

from utils.exceptions import ConfigurationError, ErrorCodes
from utils.logging_manager import store_logger

from .models import Quote


class QuoteCatalog:
    """名言目录"""

    def __init__(self, quotes: Iterable[Quote]):
        self._quotes: Dict[str, Quote] = {}
        for quote in quotes:
            if quote.id in self._quotes:
                raise ConfigurationError(
                    f"Duplicate quote id: {quote.id}",
                    ErrorCodes.CONFIG_INVALID_FORMAT
                )
            self._quotes[quote.id] = quote
        store_logger.info(f"[QuoteCatalog] Loaded {len(self._quotes)} quotes")

    @classmethod
    def from_config(cls, quotes_data: List[Dict[str, Any]]) -> "QuoteCatalog":
        """从配置数据构建目录"""
        try:
            quotes = [Quote.from_dict(item) for item in quotes_data]
        except (KeyError, TypeError) as e:
            raise ConfigurationError(
                f"Invalid quote definition: {e}",
                ErrorCodes.CONFIG_INVALID_FORMAT
            ) from e
        return cls(quotes)

    def get(self, quote_id: str) -> Optional[Quote]:
        """根据ID获取名言"""
        return self._quotes.get(quote_id)

    def __len__(self) -> int:
        return len(self._quotes)

    def __contains__(self, quote_id: str) -> bool:
        return quote_id in self._quotes
