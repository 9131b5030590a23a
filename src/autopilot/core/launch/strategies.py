"""
Launch strategies for each supported terminal emulator.

A strategy turns a LaunchRequest into a SpawnSpec: the exact process that
opens a new window running the payload. Strategies only build strings and
never raise for a non-empty path; process creation happens later in
``spawner.spawn_detached``.

Each terminal has two flavours:
    script: the payload is executed by the window's shell (the worker)
    interpreted: the payload is run through an interpreter (the dashboard)

Quoting rules differ per shell:
    - POSIX shells get double-quoted words with ``\\ " $ ` `` escaped
    - bash inside a double-quoted Windows argument gets single-quoted words
    - AppleScript string literals escape backslash and double quote
    - PowerShell gets single-quoted literals with quotes doubled, and the
      whole script travels base64-encoded so no outer layer reinterprets it
"""

from __future__ import annotations

import base64
import re
import sys
from collections.abc import Callable

from autopilot.core.launch.models import LaunchRequest, PayloadKind, Platform, SpawnSpec
from autopilot.core.launch.paths import to_posix_shell_path

# ============================================================================
# Quoting helpers
# ============================================================================

_POSIX_DOUBLE_QUOTE_SPECIAL = re.compile(r'([\\"$`])')
_POWERSHELL_QUOTES = re.compile("(['\\u2018\\u2019\\u201a\\u201b])")


def sanitize_title(title: str) -> str:
    """Drop control characters and replace double quotes in a window title."""
    printable = "".join(ch for ch in title if ch.isprintable())
    return printable.replace('"', "'")


def posix_double_quote(value: str) -> str:
    """Quote a word for a POSIX shell using double quotes."""
    return '"' + _POSIX_DOUBLE_QUOTE_SPECIAL.sub(r"\\\1", value) + '"'


def posix_single_quote(value: str) -> str:
    """Quote a word for a POSIX shell using single quotes."""
    return "'" + value.replace("'", "'\\''") + "'"


def applescript_string(value: str) -> str:
    """Render an AppleScript string literal."""
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def powershell_literal(value: str) -> str:
    """Render a PowerShell single-quoted (verbatim) string literal."""
    return "'" + _POWERSHELL_QUOTES.sub(r"\1\1", value) + "'"


def windows_arg(value: str) -> str:
    """
    Make a value safe inside a double-quoted cmd.exe argument.

    Windows paths cannot contain double quotes, so any that show up are
    removed rather than escaped.
    """
    return value.replace('"', "")


def _wt_escape(value: str) -> str:
    # wt.exe splits its command line on ';' into separate tabs
    return value.replace(";", "\\;")


def _interpreter(request: LaunchRequest) -> str:
    return request.interpreter or sys.executable


def _posix(path: str) -> str:
    return to_posix_shell_path(path, Platform.WINDOWS)


# ============================================================================
# Shell command bodies
# ============================================================================


def _posix_body(request: LaunchRequest, *, hold: bool = False) -> str:
    """``cd "<cwd>" && "<payload>"`` for shells on POSIX hosts."""
    words: list[str] = []
    if request.kind == PayloadKind.INTERPRETED:
        words.append(posix_double_quote(_interpreter(request)))
    words.append(posix_double_quote(request.payload_path))
    words.extend(posix_double_quote(arg) for arg in request.args)

    body = f"cd {posix_double_quote(request.working_dir)} && {' '.join(words)}"
    if hold:
        # Keep the window open with a shell after the payload exits
        body += "; exec bash"
    return body


def _bash_on_windows_body(
    request: LaunchRequest,
    quote: Callable[[str], str] = posix_single_quote,
) -> str:
    """
    Command for the bash that ships with Git for Windows.

    Directory and payload are translated to ``/c/...`` form. Raw scripts are
    run through ``bash`` since NTFS carries no executable bit.
    """
    cwd = _posix(request.working_dir)
    if request.kind == PayloadKind.INTERPRETED:
        words = [quote(_posix(_interpreter(request))), quote(_posix(request.payload_path))]
    else:
        words = ["bash", quote(_posix(request.payload_path))]
    words.extend(quote(arg) for arg in request.args)
    return f"cd {quote(cwd)} && {' '.join(words)}"


def _cmd_quoted_bash_body(request: LaunchRequest) -> str:
    """Bash command that will sit inside double quotes on a cmd.exe line."""
    stripped = LaunchRequest(
        payload_path=windows_arg(request.payload_path),
        title=request.title,
        kind=request.kind,
        working_dir=windows_arg(request.working_dir),
        interpreter=windows_arg(_interpreter(request)),
        args=tuple(windows_arg(arg) for arg in request.args),
    )
    return _bash_on_windows_body(stripped)


# ============================================================================
# Windows
# ============================================================================


def launch_windows_terminal(request: LaunchRequest) -> SpawnSpec:
    """Windows Terminal tab running bash."""
    title = _wt_escape(sanitize_title(request.title))
    body = _wt_escape(_bash_on_windows_body(request, quote=posix_double_quote))
    argv = ("wt.exe", "--title", title, "bash", "-c", body)
    return SpawnSpec(
        terminal="wt.exe",
        executable="wt.exe",
        argv=argv,
        working_dir=request.working_dir,
    )


def launch_windows_terminal_interpreted(request: LaunchRequest) -> SpawnSpec:
    """Windows Terminal tab running the interpreter natively, no shell."""
    title = _wt_escape(sanitize_title(request.title))
    argv = (
        "wt.exe",
        "--title",
        title,
        "-d",
        _wt_escape(request.working_dir),
        _wt_escape(_interpreter(request)),
        _wt_escape(request.payload_path),
        *(_wt_escape(arg) for arg in request.args),
    )
    return SpawnSpec(
        terminal="wt.exe",
        executable="wt.exe",
        argv=argv,
        working_dir=request.working_dir,
    )


def launch_cmd(request: LaunchRequest) -> SpawnSpec:
    """Command Prompt window that hands off to bash and stays open."""
    title = windows_arg(sanitize_title(request.title))
    body = _cmd_quoted_bash_body(request)
    command_line = f'cmd.exe /c start "{title}" cmd.exe /k bash -c "{body}"'
    return SpawnSpec(
        terminal="cmd.exe",
        executable="cmd.exe",
        argv=("cmd.exe", "/c", "start", title, "cmd.exe", "/k", "bash", "-c", body),
        working_dir=request.working_dir,
        command_line=command_line,
    )


def launch_cmd_interpreted(request: LaunchRequest) -> SpawnSpec:
    """Command Prompt window running the interpreter natively."""
    title = windows_arg(sanitize_title(request.title))
    words = [windows_arg(_interpreter(request)), windows_arg(request.payload_path)]
    words.extend(windows_arg(arg) for arg in request.args)
    quoted = " ".join(f'"{word}"' for word in words)
    # A leading quote after /k would be stripped and flip the outer quote state
    command_line = f'cmd.exe /c start "{title}" cmd.exe /k call {quoted}'
    return SpawnSpec(
        terminal="cmd.exe",
        executable="cmd.exe",
        argv=("cmd.exe", "/c", "start", title, "cmd.exe", "/k", "call", *words),
        working_dir=request.working_dir,
        command_line=command_line,
    )


def encode_powershell(script: str) -> str:
    """Encode a script for ``powershell -EncodedCommand`` (base64 of UTF-16LE)."""
    return base64.b64encode(script.encode("utf-16-le")).decode("ascii")


def _powershell_spec(request: LaunchRequest, payload_command: str) -> SpawnSpec:
    inner = "; ".join(
        [
            f"Set-Location -LiteralPath {powershell_literal(request.working_dir)}",
            f"$Host.UI.RawUI.WindowTitle = {powershell_literal(sanitize_title(request.title))}",
            payload_command,
        ]
    )
    encoded = encode_powershell(inner)
    argv = (
        "powershell.exe",
        "-NoProfile",
        "-Command",
        "Start-Process",
        "powershell",
        "-ArgumentList",
        f"'-NoExit','-EncodedCommand','{encoded}'",
    )
    return SpawnSpec(
        terminal="powershell.exe",
        executable="powershell.exe",
        argv=argv,
        working_dir=request.working_dir,
    )


def launch_powershell(request: LaunchRequest) -> SpawnSpec:
    """New PowerShell window that runs the script through bash."""
    words = [powershell_literal(_posix(request.payload_path))]
    words.extend(powershell_literal(arg) for arg in request.args)
    return _powershell_spec(request, f"& bash {' '.join(words)}")


def launch_powershell_interpreted(request: LaunchRequest) -> SpawnSpec:
    """New PowerShell window that runs the interpreter natively."""
    words = [powershell_literal(_interpreter(request)), powershell_literal(request.payload_path)]
    words.extend(powershell_literal(arg) for arg in request.args)
    return _powershell_spec(request, f"& {' '.join(words)}")


def _git_bash_spec(request: LaunchRequest) -> SpawnSpec:
    title = windows_arg(sanitize_title(request.title))
    body = _cmd_quoted_bash_body(request)
    command_line = f'cmd.exe /c start "{title}" bash.exe --login -i -c "{body}"'
    return SpawnSpec(
        terminal="bash.exe",
        executable="cmd.exe",
        argv=("cmd.exe", "/c", "start", title, "bash.exe", "--login", "-i", "-c", body),
        working_dir=request.working_dir,
        command_line=command_line,
    )


def launch_git_bash(request: LaunchRequest) -> SpawnSpec:
    """Git Bash console; ``--login`` resets the directory so the body cds first."""
    return _git_bash_spec(request)


def launch_git_bash_interpreted(request: LaunchRequest) -> SpawnSpec:
    return _git_bash_spec(request)


# ============================================================================
# macOS
# ============================================================================


def _terminal_app_spec(request: LaunchRequest) -> SpawnSpec:
    shell_command = _posix_body(request)
    script = "\n".join(
        [
            'tell application "Terminal"',
            f"    set newTab to do script {applescript_string(shell_command)}",
            f"    set custom title of newTab to {applescript_string(sanitize_title(request.title))}",
            "    activate",
            "end tell",
        ]
    )
    return SpawnSpec(
        terminal="osascript",
        executable="osascript",
        argv=("osascript", "-e", script),
        working_dir=request.working_dir,
    )


def launch_mac_terminal(request: LaunchRequest) -> SpawnSpec:
    """Terminal.app window driven through AppleScript."""
    return _terminal_app_spec(request)


def launch_mac_terminal_interpreted(request: LaunchRequest) -> SpawnSpec:
    return _terminal_app_spec(request)


# ============================================================================
# Linux
# ============================================================================


def launch_gnome_terminal(request: LaunchRequest) -> SpawnSpec:
    """GNOME Terminal window; drops to an interactive shell when the worker exits."""
    argv = (
        "gnome-terminal",
        "--window",
        f"--title={sanitize_title(request.title)}",
        "--",
        "bash",
        "-c",
        _posix_body(request, hold=True),
    )
    return SpawnSpec(
        terminal="gnome-terminal",
        executable="gnome-terminal",
        argv=argv,
        working_dir=request.working_dir,
    )


def launch_gnome_terminal_interpreted(request: LaunchRequest) -> SpawnSpec:
    argv = (
        "gnome-terminal",
        "--window",
        f"--title={sanitize_title(request.title)}",
        "--",
        "bash",
        "-c",
        _posix_body(request),
    )
    return SpawnSpec(
        terminal="gnome-terminal",
        executable="gnome-terminal",
        argv=argv,
        working_dir=request.working_dir,
    )


def launch_xterm(request: LaunchRequest) -> SpawnSpec:
    """xterm window held open after the worker exits."""
    argv = (
        "xterm",
        "-hold",
        "-title",
        sanitize_title(request.title),
        "-e",
        "bash",
        "-c",
        _posix_body(request),
    )
    return SpawnSpec(
        terminal="xterm",
        executable="xterm",
        argv=argv,
        working_dir=request.working_dir,
    )


def launch_xterm_interpreted(request: LaunchRequest) -> SpawnSpec:
    argv = (
        "xterm",
        "-title",
        sanitize_title(request.title),
        "-e",
        "bash",
        "-c",
        _posix_body(request),
    )
    return SpawnSpec(
        terminal="xterm",
        executable="xterm",
        argv=argv,
        working_dir=request.working_dir,
    )


def launch_x_terminal_emulator(request: LaunchRequest) -> SpawnSpec:
    """
    Debian ``x-terminal-emulator`` alternative.

    Only ``-T`` and ``-e`` are guaranteed by the alternatives policy, so the
    window is held open with a trailing shell instead of ``-hold``.
    """
    argv = (
        "x-terminal-emulator",
        "-T",
        sanitize_title(request.title),
        "-e",
        "bash",
        "-c",
        _posix_body(request, hold=True),
    )
    return SpawnSpec(
        terminal="x-terminal-emulator",
        executable="x-terminal-emulator",
        argv=argv,
        working_dir=request.working_dir,
    )


def launch_x_terminal_emulator_interpreted(request: LaunchRequest) -> SpawnSpec:
    argv = (
        "x-terminal-emulator",
        "-T",
        sanitize_title(request.title),
        "-e",
        "bash",
        "-c",
        _posix_body(request),
    )
    return SpawnSpec(
        terminal="x-terminal-emulator",
        executable="x-terminal-emulator",
        argv=argv,
        working_dir=request.working_dir,
    )


__all__ = [
    "applescript_string",
    "encode_powershell",
    "launch_cmd",
    "launch_cmd_interpreted",
    "launch_git_bash",
    "launch_git_bash_interpreted",
    "launch_gnome_terminal",
    "launch_gnome_terminal_interpreted",
    "launch_mac_terminal",
    "launch_mac_terminal_interpreted",
    "launch_powershell",
    "launch_powershell_interpreted",
    "launch_windows_terminal",
    "launch_windows_terminal_interpreted",
    "launch_x_terminal_emulator",
    "launch_x_terminal_emulator_interpreted",
    "launch_xterm",
    "launch_xterm_interpreted",
    "posix_double_quote",
    "posix_single_quote",
    "powershell_literal",
    "sanitize_title",
    "windows_arg",
]
