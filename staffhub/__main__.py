"""Print every project's progress and the backend status, e.g. ``python -m staffhub``."""

from __future__ import annotations

import asyncio
import logging

from staffhub.core.config import settings
from staffhub.main import configure_logging, open_container

logger = logging.getLogger("staffhub")


async def report() -> None:
    async with open_container(settings) as container:
        for project in await container.projects.get_all_projects():
            progress = await container.progress.progress_for(project)
            status = project.status.value if project.status else "-"
            logger.info("#%s %-30s %-10s %3d%%", project.id, project.name, status, progress)
        for name, available in container.backend_status().items():
            logger.info("%-10s %s", name, "online" if available else "OFFLINE (local store)")


def main() -> None:
    configure_logging(settings)
    asyncio.run(report())


if __name__ == "__main__":
    main()
