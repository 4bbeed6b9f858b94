"""
Docker Compose Log Service
Reads container logs from the local development stack
"""

import asyncio
import contextlib
from pathlib import Path
from typing import List

from testbench.core.config import settings
from testbench.core.logging import get_logger
from testbench.core.exceptions import LogSourceError

logger = get_logger(__name__)


class DockerComposeLogService:
    """Service for reading logs via `docker-compose logs`"""

    def __init__(self):
        self.command = settings.local_logs_command
        self.compose_dir = Path(settings.local_logs_compose_dir)
        self.compose_files = settings.compose_files
        self.max_bytes = settings.local_logs_max_bytes
        self.timeout = settings.local_logs_timeout

    def build_command(self, service: str, tail: int, since: int = 0) -> List[str]:
        """
        Build the docker-compose argument list

        Args:
            service: Compose service name, or "all"
            tail: Number of lines per container
            since: Epoch seconds to start from, 0 for no limit

        Returns:
            Full argv including the executable
        """
        args = [self.command]
        for compose_file in self.compose_files:
            args.extend(["-f", compose_file])
        args.extend(["logs", "--tail", str(tail)])

        if since > 0:
            args.extend(["--since", str(since)])

        if service != "all":
            args.append(service)

        return args

    async def fetch_logs(self, service: str, tail: int, since: int = 0) -> str:
        """
        Run docker-compose and return its combined output

        Raises:
            LogSourceError: If the command cannot run, fails or times out
        """
        args = self.build_command(service, tail, since)
        logger.debug(f"Running {' '.join(args)} in {self.compose_dir}")

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                cwd=str(self.compose_dir),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            logger.error(f"Could not start {self.command}: {e}")
            raise LogSourceError(str(e), source="docker") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            raise LogSourceError(
                f"{self.command} did not finish within {self.timeout:g}s", source="docker"
            ) from e

        if process.returncode != 0:
            error_text = stderr.decode("utf-8", errors="replace").strip()
            raise LogSourceError(
                f"Command failed: {' '.join(args)}\n{error_text}".rstrip(),
                source="docker"
            )

        output = stdout + stderr
        if len(output) > self.max_bytes:
            logger.warning(f"Local log output truncated to the last {self.max_bytes} bytes")
            output = output[-self.max_bytes:]

        return output.decode("utf-8", errors="replace").strip()
