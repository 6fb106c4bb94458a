from __future__ import annotations


class Console:
    """Interactive prompts for the CLI. Return None on quit / EOF."""

    @staticmethod
    def select(prompt: str, options: list[str]) -> str | None:
        while True:
            try:
                raw = input(f"{prompt} [ {'/'.join(options + ['q(uit)'])} ] : ").strip()
            except (EOFError, KeyboardInterrupt):  # noqa: PERF203
                print()
                return None
            if not raw: continue
            ans = raw.lower()
            if ans in ('q', 'quit'): return None
            if ans in options: return ans

    @staticmethod
    def input_str(prompt: str) -> str | None:
        while True:
            try:
                raw = input(f"{prompt} : ").strip()
            except (EOFError, KeyboardInterrupt):  # noqa: PERF203
                print()
                return None
            if not raw: continue
            if raw.lower() in ('q', 'quit'): return None
            return raw
