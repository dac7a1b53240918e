"""Concurrent kubectl execution across contexts.

Every context gets its own ``kubectl --context <name> ...`` subprocess.
All processes run at once and the results are only returned after every
one of them has finished. A failing context is captured in its
``ContextResult`` and never cancels its siblings.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from kubectl_multi.models import ContextResult
from kubectl_multi.utils.errors import CommandFailedError

logger = logging.getLogger(__name__)


class ContextRunner:
    """Runs one kubectl command against many contexts.

    Usage:
        runner = ContextRunner(timeout=30)
        results = runner.run("get", ["pods"], ["dev", "prod"])
    """

    def __init__(
        self,
        kubectl_path: str = "kubectl",
        kubeconfig: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._kubectl_path = kubectl_path
        self._kubeconfig = kubeconfig
        self._timeout = timeout

    def build_command(self, context: str, command: str, args: Sequence[str]) -> list[str]:
        """Build the kubectl argv for one context."""
        cmd = [self._kubectl_path]
        if self._kubeconfig:
            cmd.extend(["--kubeconfig", self._kubeconfig])
        cmd.extend(["--context", context, command])
        cmd.extend(args)
        return cmd

    async def _run_one(self, context: str, command: str, args: Sequence[str]) -> ContextResult:
        cmd = self.build_command(context, command, args)
        logger.debug(f"Running {' '.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            return ContextResult(
                context=context,
                output="",
                error=CommandFailedError(f"failed to start {self._kubectl_path}: {e}"),
            )

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            logger.debug(f"Context {context} timed out after {self._timeout}s")
            return ContextResult(
                context=context,
                output="",
                error=CommandFailedError(f"timed out after {self._timeout}s"),
            )

        out = stdout.decode(errors="replace") if stdout else ""
        if process.returncode != 0:
            err = stderr.decode(errors="replace") if stderr else ""
            logger.debug(f"Context {context} exited with status {process.returncode}")
            return ContextResult(
                context=context,
                output=out + err,
                error=CommandFailedError(f"exit status {process.returncode}"),
            )
        return ContextResult(context=context, output=out)

    async def run_async(
        self,
        command: str,
        args: Sequence[str],
        contexts: Sequence[str],
    ) -> list[ContextResult]:
        """Run the command against all contexts concurrently.

        Returns:
            One result per context, in the order of ``contexts``.
        """
        logger.info(f"Running '{command}' against {len(contexts)} context(s)")
        results = await asyncio.gather(
            *(self._run_one(context, command, args) for context in contexts)
        )
        return list(results)

    def run(
        self,
        command: str,
        args: Sequence[str],
        contexts: Sequence[str],
    ) -> list[ContextResult]:
        """Blocking wrapper around :meth:`run_async`."""
        return asyncio.run(self.run_async(command, args, contexts))
