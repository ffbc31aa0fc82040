# src/hamming/cli.py

"""
Hamming - the N-th 5-smooth number

Description:
    Computes H(N), the N-th number of the form 2^p * 3^q * 5^r (H(0) = 1),
    with a width-guarded integer heap, a dense three-pointer merge, or a
    windowed merge whose memory stays small for N in the billions.

usage: hamming -h
"""

from __future__ import annotations

import argparse
import faulthandler
import os
import platform
import sys
import textwrap
import threading
import traceback
from decimal import Decimal, InvalidOperation
from importlib.resources import files as pkg_files

from colorama import Fore, Style
from colorama import init as colorama_init

from hamming import __version__ as _ver
from hamming import config as CONFIG
from hamming.calculator import HammingCalculator
from hamming.errors import IncompleteError, OutOfRangeError, UserInputError
from hamming.fmt import format_duration, format_index, format_result
from hamming.progress import Progress
from hamming.registry import discover, get_solver
from hamming.runtime import APPLY, CFG, debug
from hamming.runtime import current as _rt_current
from hamming.smooth import SmoothNumber
from hamming.solvers import BoundedIntegerSolver
from hamming.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir


def _install_loud_error_handlers(debug_on: bool) -> None:
    if not debug_on:
        return
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook

    def _thread_excepthook(args):
        sys.stderr.write("\n[UNCAUGHT THREAD EXCEPTION]\n")
        traceback.print_exception(args.exc_type, args.exc_value, args.exc_traceback, file=sys.stderr)
        sys.stderr.flush()
    threading.excepthook = _thread_excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    if not msg.startswith("Error:"):
        msg = f"{Fore.RED}Error:{Style.RESET_ALL} {msg}"
    print(msg, file=sys.stderr)


def parse_index(text: str) -> int:
    """
    Read a non-negative index. Accepts digit separators ('1_000_000',
    '1,000,000') and exact scientific shorthand ('4e9', '1.5e6').
    """
    s = text.strip().replace("_", "").replace(",", "")
    try:
        d = Decimal(s)
    except InvalidOperation:
        raise UserInputError(f"Invalid input: '{text}' is not an index") from None
    if not d.is_finite() or d != d.to_integral_value():
        raise UserInputError(f"Invalid input: '{text}' is not a whole number")
    n = int(d)
    if n < 0:
        raise UserInputError(f"Invalid input: index must be non-negative, got {text}")
    return n


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      init [overwrite]
          Create the workspace and copy packaged profiles if missing.
          'overwrite' replaces them (requires HAMMING_DEV=1).

      list
          List the available solvers.

      profiles
          List profiles with their descriptions.

      limit
          Show the largest index the bounded solver accepts for --bits.

      where
          Show the workspace and package paths.

    examples:
      hamming 1500 --method all
      hamming 4e9 --profile huge
    """)

    p = argparse.ArgumentParser(
        prog="hamming",
        description="Hamming numbers — the N-th number of the form 2^p·3^q·5^r",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="N | command",
                   help="one or more 0-based indices, or a command")
    p.add_argument("--method", default=None,
                   help="solver to use: bounded, dense, windowed or all (default from profile)")
    p.add_argument("--profile", default=None, help="profile name from the workspace")
    p.add_argument("--bits", type=int, default=None, help="word width guarded by the bounded solver")
    p.add_argument("--timeout", type=float, default=None, help="stop a solve after this many seconds")
    p.add_argument("--quiet", action="store_true", help="Suppress progress and timing output")
    p.add_argument("--debug", action="store_true", help="Show internal trace info and full tracebacks")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except (UserInputError, OutOfRangeError) as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        if "--debug" in (argv if argv is not None else sys.argv) or _rt_current().debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _configure_text_streams() -> None:
    if os.environ.get("PYTHONIOENCODING"):
        return
    # Only touch redirected output (pipes/files), leave TTY as-is
    if sys.stdout.isatty() or not hasattr(sys.stdout, "reconfigure"):
        return
    enc = (sys.stdout.encoding or "").lower()
    if platform.system() == "Windows" or enc in ("", "ascii", "us-ascii"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")
        sys.stderr.reconfigure(encoding="utf-8", errors="replace")


def _select_profile(explicit: str | None) -> str:
    """Precedence: explicit --profile, then last used, then 'default'."""
    if explicit:
        if not CONFIG.has_profile(explicit):
            names = ", ".join(n for n, _ in CONFIG.list_profiles_with_descriptions())
            raise UserInputError(f"unknown profile '{explicit}' (available: {names})")
        return explicit
    last = CONFIG.read_current_profile()
    if last and CONFIG.has_profile(last):
        return last
    return "default"


# ---- commands ----
def _cmd_init(items: list[str]) -> int:
    if len(items) > 1 and items[1] == "overwrite":
        if os.environ.get("HAMMING_DEV") != "1":
            print("Refusing to overwrite: set HAMMING_DEV=1 to enable developer overwrite.")
            return 2
        ws, copied = seed_workspace(overwrite=True)
        print(f"Workspace ready at: {ws} (overwrote existing files)")
    else:
        ws, _, copied = ensure_workspace_seeded()
        print(f"Workspace ready at: {ws}")
    print(f"Copied -> profiles: {copied.get('profiles', 0)}")
    return 0


def _cmd_list() -> int:
    print(f"{Fore.CYAN}{Style.BRIGHT}Solvers:{Style.RESET_ALL}")
    for name, info in discover().items():
        kind = "exact" if info.exact else f"{CFG('BOUNDED.WORD_BITS', 64)}-bit"
        print(f"  - {Fore.WHITE}{name:<9}{Style.RESET_ALL} [{kind}] {info.description}")
    return 0


def _cmd_profiles() -> int:
    current = CONFIG.read_current_profile() or "default"
    for name, desc in CONFIG.list_profiles_with_descriptions():
        mark = f"{Fore.GREEN}*{Style.RESET_ALL}" if name == current else " "
        print(f" {mark} {name:<12} {desc}")
    return 0


def _cmd_limit(bits: int) -> int:
    engine = BoundedIntegerSolver(bits=bits)
    last = engine.limit
    value = SmoothNumber.from_int(engine.solve(last))
    print(f"{bits}-bit word: bounded solver accepts indices 0..{format_index(last)}")
    print(format_result(last, value, max_digits=int(CFG("OUTPUT.MAX_DIGITS", 60))))
    return 0


# ---- solving ----
def _run_one(n: int, method: str, *, bits: int, timeout: float | None, quiet: bool) -> int:
    rt = _rt_current()
    methods = list(discover()) if method == "all" else [get_solver(method).name]
    calc = HammingCalculator(n)
    max_digits = int(CFG("OUTPUT.MAX_DIGITS", 60))
    rc = 0

    for name in methods:
        progress = Progress(n, enabled=rt.progress and not quiet, label=f"{name} H({format_index(n)})")
        kwargs = {"on_progress": progress, "max_seconds": timeout}
        if name == "bounded":
            kwargs["bits"] = bits
        try:
            calc.solve(name, **kwargs)
        except OutOfRangeError as e:
            if method != "all":
                raise
            calc.skipped.append((name, str(e)))
            debug(f"{name} skipped: {e}")
        except IncompleteError as e:
            progress.done()   # clear the bar before printing
            partial = e.partial if isinstance(e.partial, SmoothNumber) else SmoothNumber.from_int(e.partial)
            print(f"{Fore.YELLOW}[{name}] {e}; last term reached:{Style.RESET_ALL}")
            print(format_result(e.reached, partial, max_digits=max_digits))
            rc = 2
            continue
        finally:
            progress.done()

    if not calc.reports:
        return rc

    first = calc.reports[0].value
    print(format_result(n, first, max_digits=max_digits))
    for rep in calc.reports:
        if rep.value != first:
            print(f"{Fore.RED}{Style.BRIGHT}[{rep.method}] disagrees: {rep.value.exponent_form()}{Style.RESET_ALL}")
            rc = 1
        elif not quiet:
            print(f"  {Style.DIM}[{rep.method}] {format_duration(rep.elapsed)}{Style.RESET_ALL}")
    if not quiet:
        for name, reason in calc.skipped:
            print(f"  {Fore.YELLOW}[{name}] skipped: {reason}{Style.RESET_ALL}")
    return rc


# ---- main ----
def _main_impl(argv=None) -> int:
    colorama_init(autoreset=True)
    _configure_text_streams()

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    ensure_workspace_seeded()

    items = list(args.items)
    if items and items[0] == "init":
        return _cmd_init(items)
    if items and items[0] == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Package:   {pkg_files('hamming')}")
        return 0

    profile_name = _select_profile(args.profile)
    selected = CONFIG.load_settings(profile_name)
    APPLY(selected)
    if args.profile:
        CONFIG.write_current_profile(args.profile)
    rt.debug = rt.debug or bool(args.debug)
    _install_loud_error_handlers(rt.debug)

    bits = int(args.bits if args.bits is not None else CFG("BOUNDED.WORD_BITS", 64))
    if bits < 3:
        raise UserInputError(f"--bits must be at least 3, got {bits}")
    if args.bits is not None:
        rt.settings.setdefault("BOUNDED", {})["WORD_BITS"] = bits
    if args.timeout is not None and args.timeout < 0:
        raise UserInputError(f"--timeout must be non-negative, got {args.timeout}")
    timeout = args.timeout if args.timeout is not None else (CFG("SOLVER.MAX_SECONDS", 0) or None)
    if timeout == 0:
        # 0 means no limit, and an explicit --timeout 0 also lifts the profile budget
        timeout = float("inf")
    method = (args.method or CFG("SOLVER.DEFAULT_METHOD", "windowed")).lower()

    debug(f"profile: {profile_name} ({selected._source})")
    debug(f"method={method} bits={bits} timeout={timeout} check_every={CFG('SOLVER.CHECK_EVERY', 65536)}")

    if items and items[0] == "list":
        return _cmd_list()
    if items and items[0] == "profiles":
        return _cmd_profiles()
    if items and items[0] == "limit":
        return _cmd_limit(bits)

    if not items:
        parser.print_usage()
        return 2

    if method != "all":
        get_solver(method)   # fail before any work on a bad name

    indices = [parse_index(s) for s in items]
    rc = 0
    for n in indices:
        rc = max(rc, _run_one(n, method, bits=bits, timeout=timeout, quiet=args.quiet))
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
