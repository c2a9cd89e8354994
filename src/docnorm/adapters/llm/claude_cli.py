"""Completion adapter using Claude CLI."""

import asyncio
import json
import logging
import subprocess

from ...ports.llm import CompletionPort, SamplingParams

logger = logging.getLogger(__name__)


class ClaudeCLIAdapter(CompletionPort):
    """Completion implementation using Claude CLI (uses subscription).

    The CLI exposes no sampling controls, so params are not forwarded.
    """

    def __init__(self, executable: str = "claude") -> None:
        self.executable = executable

    async def complete(self, prompt: str, params: SamplingParams) -> str:
        logger.info("Requesting completion from Claude CLI")

        args = [self.executable, "-p", "--output-format", "json"]
        process = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await process.communicate(prompt.encode())
        except asyncio.CancelledError:
            process.kill()
            raise

        if process.returncode != 0:
            raise subprocess.CalledProcessError(
                process.returncode, args, output=stdout, stderr=stderr
            )

        data = json.loads(stdout.decode())
        return data.get("result", "")
