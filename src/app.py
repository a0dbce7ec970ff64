"""
Main Application Entry Point.

Runs one reconciliation cycle for every configured repository. The process is
meant to be started periodically by an external scheduler (cron, systemd
timer, CI schedule); it does not schedule itself.

For each repository it:
- Loads the saved pull request snapshots of the job
- Compares every open pull request with its last snapshot
- Saves the new snapshots
- Queues a build for every detected cause

A failing repository is logged and does not stop the others.
"""

import asyncio

from config import settings, logger
from trigger.factory import build_job


async def main() -> int:
    """
    Execute one poll over all configured repositories.

    Returns:
        int: Number of causes queued across all repositories.
    """
    logger.info("Starting pull request polling...")

    if not settings.repository_urls:
        logger.warning("No repositories configured (GITHUB_REPO_URLS is empty)")
        return 0

    total = 0
    for repo_url in settings.repository_urls:
        try:
            cycle = build_job(settings, repo_url)
            causes = await cycle.run()
            total += len(causes)
        except Exception as e:
            logger.error(
                {
                    "message": "Failed to poll repository",
                    "repository": repo_url,
                    "error": str(e),
                },
                exc_info=True,
            )

    logger.info({"message": "Polling finished", "causes": total})
    return total


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
