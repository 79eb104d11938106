"""Widget process entrypoint: re-render the macro snapshot on a fixed timer."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from fit_tracker.app_logging import configure_logging
from fit_tracker.config import Settings
from fit_tracker.containers import WidgetContainer, build_widget_container

_logger = logging.getLogger(__name__)


async def run_widget(
    container: WidgetContainer,
    *,
    iterations: int | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Refresh the snapshot, then wait the refresh interval, forever by default."""
    provider = container.snapshot_provider
    interval = provider.refresh_interval.total_seconds()
    count = 0
    while iterations is None or count < iterations:
        try:
            snapshot = await provider.refresh()
        except Exception:
            _logger.exception("Widget refresh crashed")
        else:
            _logger.info(
                "Widget %s, next refresh at %s",
                provider.state.value,
                snapshot.next_refresh_at.isoformat(),
            )
        count += 1
        if iterations is None or count < iterations:
            await sleep(interval)


def main() -> None:
    """Run the widget refresh loop until interrupted."""
    settings = Settings()
    configure_logging(settings.log_level)
    asyncio.run(run_widget(build_widget_container(settings)))


if __name__ == "__main__":
    main()
