#!/usr/bin/env python3

import os
import subprocess
import sys


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def _run_example(path: str, *, input_data: bytes | None, args=(), timeout_s: float = 10.0) -> dict:
    cmd = [sys.executable, "-m", "bfc", *args, path]
    env = dict(os.environ, PYTHONPATH=os.path.join(ROOT, "src"))
    try:
        p = subprocess.run(
            cmd,
            input=input_data or b"",
            capture_output=True,
            cwd=ROOT,
            env=env,
            timeout=timeout_s,
        )
        return {
            "ok": p.returncode == 0,
            "returncode": p.returncode,
            "stdout": p.stdout,
            "stderr": p.stderr.decode("utf-8", "replace"),
            "timeout": False,
        }
    except subprocess.TimeoutExpired as e:
        return {
            "ok": False,
            "returncode": None,
            "stdout": e.stdout or b"",
            "stderr": (e.stderr or b"").decode("utf-8", "replace") + "\n[TIMEOUT]",
            "timeout": True,
        }


def main() -> int:
    examples = [
        {
            "file": "examples/hello.bf",
            "input": None,
            "check": lambda out: out == b"Hello World!\n",
            "expect": "exactly equals 'Hello World!\\n'",
        },
        {
            "file": "examples/echo.bf",
            "input": b"abc\n",
            "check": lambda out: out == b"abc\n",
            "expect": "exactly equals 'abc\\n'",
        },
        {
            "file": "examples/wrap.bf",
            "args": ["-t16"],
            "input": None,
            "check": lambda out: out == b"\xff\x00",
            "expect": "exactly equals bytes 255, 0",
        },
    ]

    print("=== bfc Examples Verification ===")

    any_fail = False
    for ex in examples:
        r = _run_example(ex["file"], input_data=ex["input"], args=ex.get("args", ()))
        passed = r["ok"] and ex["check"](r["stdout"])
        status = "PASS" if passed else "FAIL"
        print(f"\n[{status}] {ex['file']}")

        if passed:
            continue

        any_fail = True
        print(f"Expected: {ex['expect']}")
        print(f"Return code: {r['returncode']}  Timeout: {r['timeout']}")
        print("--- program output ---")
        print(repr(r["stdout"][:2000]))
        print("--- stderr ---")
        print(r["stderr"][:2000])

    if any_fail:
        print("\nSome examples FAILED.")
        return 1

    print("\nAll examples passed (output checks).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
