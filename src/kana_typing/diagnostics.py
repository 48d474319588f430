"""診断イベントの通知。

アライメントと検証の内部状態は、ロガー（DEBUG）と任意のオブザーバーに通知する。
オブザーバーは結果に影響しない。
"""

import logging
from collections.abc import Callable
from typing import Any

# (イベント名, ペイロード) を受け取るコールバック
Observer = Callable[[str, dict[str, Any]], None]


def emit(
    logger: logging.Logger, observer: Observer | None, event: str, **payload: Any
) -> None:
    """イベントをDEBUGログとオブザーバーに通知する。"""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s: %s", event, payload)
    if observer is not None:
        observer(event, payload)
