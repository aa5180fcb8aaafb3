"""
Command Runner - subprocess execution with capture and live output.

Implements:
- argv-based spawning (no shell interpretation)
- Unconditional stdout/stderr capture
- Optional live tee of the child's output to the parent terminal
- Lenient or strict handling of non-zero exit codes
- Timeout enforcement
- Killing the whole process group on timeout, cancellation or error
"""

import asyncio
import codecs
import logging
import os
import shlex
import signal
import sys
import time
from pathlib import Path
from typing import IO, Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.config import RunnerConfig
from ..core.errors import CommandFailedError, CommandStartError, CommandTimeoutError

logger = logging.getLogger(__name__)

Command = Union[str, Sequence[Union[str, os.PathLike]]]

CHUNK_SIZE = 4096

# Option spellings accepted from callers used to the camelCase API
_OPTION_ALIASES = {"throwError": "throw_error"}


class RunOptions(BaseModel):
    """
    Options for a single command execution.

    Unknown keys are kept and forwarded to asyncio.create_subprocess_exec.
    """
    model_config = ConfigDict(extra="allow")

    verbose: bool = Field(default=True, description="Tee child output to the parent terminal")
    throw_error: bool = Field(default=False, description="Raise on non-zero exit")
    cwd: Optional[Union[str, Path]] = Field(default=None, description="Working directory")
    env: Optional[Dict[str, str]] = Field(default=None, description="Environment, replaces os.environ")
    timeout: Optional[float] = Field(default=None, gt=0, description="Timeout in seconds")
    encoding: str = "utf-8"

    @field_validator("verbose", mode="before")
    @classmethod
    def validate_verbose(cls, v: Any) -> Any:
        # Only an explicit false silences the tee
        return True if v is None else v

    def spawn_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments forwarded verbatim to process creation."""
        kwargs: Dict[str, Any] = dict(self.model_extra or {})
        if self.cwd is not None:
            kwargs["cwd"] = self.cwd
        if self.env is not None:
            kwargs["env"] = self.env
        return kwargs

    @classmethod
    def merge(
        cls,
        config: Optional[RunnerConfig] = None,
        options: Optional[Union["RunOptions", Mapping[str, Any]]] = None,
        **overrides: Any,
    ) -> "RunOptions":
        """Build options from config defaults, then options, then overrides."""
        data: Dict[str, Any] = (config or RunnerConfig()).model_dump()

        if isinstance(options, RunOptions):
            data.update(options.model_dump(exclude_unset=True))
            data.update(options.model_extra or {})
        elif options is not None:
            data.update(_normalize(options))

        data.update(_normalize(overrides))
        return cls(**data)


def _normalize(options: Mapping[str, Any]) -> Dict[str, Any]:
    return {_OPTION_ALIASES.get(key, key): value for key, value in options.items()}


class ExecutionRequest(BaseModel):
    """A command line plus the options it runs with."""
    argv: List[str]
    options: RunOptions = Field(default_factory=RunOptions)

    @field_validator("argv")
    @classmethod
    def validate_argv(cls, v: List[str]) -> List[str]:
        if not v or not v[0]:
            raise ValueError("Command cannot be empty")
        return v

    @classmethod
    def from_command(cls, command: Command, options: RunOptions) -> "ExecutionRequest":
        """
        Build a request from a command.

        A string is split on whitespace, so arguments containing
        spaces need the sequence form.
        """
        if isinstance(command, str):
            argv = command.split()
        else:
            argv = [os.fspath(part) for part in command]
        return cls(argv=argv, options=options)

    @property
    def display(self) -> str:
        return shlex.join(self.argv)


class CommandResult(BaseModel):
    """Outcome of a finished command."""
    argv: List[str]
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class CommandRunner:
    """
    Runs external commands asynchronously.

    Features:
    - Capture of stdout and stderr in arrival order
    - Live tee to the parent's streams when verbose
    - Lenient (default) or strict error policy
    - Timeout with child kill
    """

    def __init__(
        self,
        config: Optional[RunnerConfig] = None,
        stdout: Optional[IO[str]] = None,
        stderr: Optional[IO[str]] = None,
        diagnostics: Optional[IO[str]] = None,
    ):
        self.config = config or RunnerConfig()
        # Resolved per call so redirected sys streams are honoured
        self._stdout = stdout
        self._stderr = stderr
        self._diagnostics = diagnostics

    async def run(
        self,
        command: Command,
        options: Optional[Union[RunOptions, Mapping[str, Any]]] = None,
        **overrides: Any,
    ) -> str:
        """
        Run a command and return its stdout.

        Args:
            command: argv sequence, or a string split on whitespace
            options: RunOptions or mapping of option values
            **overrides: Individual option values

        Returns:
            Captured stdout text

        Raises:
            CommandStartError: The process could not be created
            CommandFailedError: Non-zero exit with throw_error set
            CommandTimeoutError: The timeout elapsed
        """
        result = await self.execute(command, options, **overrides)
        return result.stdout

    async def execute(
        self,
        command: Command,
        options: Optional[Union[RunOptions, Mapping[str, Any]]] = None,
        **overrides: Any,
    ) -> CommandResult:
        """Run a command and return the full result, applying the error policy."""
        request = ExecutionRequest.from_command(
            command, RunOptions.merge(self.config, options, **overrides)
        )
        opts = request.options

        logger.debug("Running %s", request.display)
        started = time.monotonic()

        spawn_kwargs = opts.spawn_kwargs()
        group = False
        if os.name == "posix":
            if "process_group" not in spawn_kwargs:
                # Own process group, so a kill reaches grandchildren holding the pipes
                spawn_kwargs.setdefault("start_new_session", True)
            group = bool(spawn_kwargs.get("start_new_session")) or spawn_kwargs.get("process_group") == 0

        try:
            process = await asyncio.create_subprocess_exec(
                *request.argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                **spawn_kwargs,
            )
        except OSError as e:
            logger.debug("Could not start %s: %s", request.argv[0], e)
            raise CommandStartError(request.argv, e) from e

        stdout_buf = bytearray()
        stderr_buf = bytearray()
        stdout_tee = (self._stdout or sys.stdout) if opts.verbose else None
        stderr_tee = (self._stderr or sys.stderr) if opts.verbose else None

        try:
            await asyncio.wait_for(
                asyncio.gather(
                    _pump(process.stdout, stdout_buf, stdout_tee, opts.encoding),
                    _pump(process.stderr, stderr_buf, stderr_tee, opts.encoding),
                    process.wait(),
                ),
                timeout=opts.timeout,
            )
        except asyncio.TimeoutError:
            await _kill(process, group)
            logger.warning("Command %s timed out after %ss", request.display, opts.timeout)
            raise CommandTimeoutError(request.argv, opts.timeout) from None
        except BaseException:
            await _kill(process, group)
            raise

        result = CommandResult(
            argv=request.argv,
            exit_code=process.returncode,
            stdout=stdout_buf.decode(opts.encoding, errors="replace"),
            stderr=stderr_buf.decode(opts.encoding, errors="replace"),
            duration=time.monotonic() - started,
        )
        logger.debug(
            "%s exited with code %d in %.3fs", request.argv[0], result.exit_code, result.duration
        )

        if not result.success:
            if opts.throw_error:
                raise CommandFailedError(
                    result.argv, result.exit_code, result.stderr, result.stdout
                )
            self._report(result)

        return result

    def run_sync(
        self,
        command: Command,
        options: Optional[Union[RunOptions, Mapping[str, Any]]] = None,
        **overrides: Any,
    ) -> str:
        """Blocking variant of run(); must not be called from a running event loop."""
        return asyncio.run(self.run(command, options, **overrides))

    def _report(self, result: CommandResult) -> None:
        """Surface a lenient failure: log it and echo stderr to diagnostics."""
        logger.warning(
            "Command %s exited with code %d", shlex.join(result.argv), result.exit_code
        )
        if not result.stderr:
            return

        stream = self._diagnostics or sys.stderr
        text = result.stderr if result.stderr.endswith("\n") else result.stderr + "\n"
        stream.write(text)
        stream.flush()


async def _pump(
    reader: asyncio.StreamReader,
    sink: bytearray,
    tee: Optional[IO[str]],
    encoding: str,
) -> None:
    """Drain a child pipe into ``sink``, mirroring decoded text to ``tee``."""
    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    while True:
        chunk = await reader.read(CHUNK_SIZE)
        if not chunk:
            break
        sink.extend(chunk)
        if tee is not None:
            tee.write(decoder.decode(chunk))
            tee.flush()

    if tee is not None:
        tail = decoder.decode(b"", final=True)
        if tail:
            tee.write(tail)
            tee.flush()


async def _kill(process: asyncio.subprocess.Process, group: bool = False) -> None:
    """
    Kill the child and wait for it.

    With ``group`` the child leads its own process group, which is killed
    as a whole so no descendant keeps the pipes open.
    """
    if group:
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            pass
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()
