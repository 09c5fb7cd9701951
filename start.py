#!/usr/bin/env python3
"""
MoodCards 启动脚本
Starts the backend API on a free local port
"""

import os
import socket
import subprocess
import sys


def _pick_free_port(host: str, preferred: int, max_tries: int = 30) -> int:
    preferred = int(preferred or 0)
    for port in range(max(preferred, 1), max(preferred, 1) + max_tries):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                sock.bind((host, port))
                return port
        except OSError:
            continue
    return preferred or 0


def check_python():
    """Check if Python 3.10+ is available"""
    version = sys.version_info
    if version.major < 3 or (version.major == 3 and version.minor < 10):
        print("[ERROR] Python 3.10+ is required")
        return False
    print(f"[OK] Python {version.major}.{version.minor}.{version.micro}")
    return True


def main():
    if not check_python():
        sys.exit(1)

    host = os.environ.get("MOODCARDS_HOST", "127.0.0.1")
    preferred = int(os.environ.get("MOODCARDS_PORT") or os.environ.get("PORT") or 8000)
    port = _pick_free_port(host, preferred) or preferred
    if port != preferred:
        print(f"[WARN] Port {preferred} is in use, using {port}")

    backend_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "backend")
    env = dict(os.environ)
    env["MOODCARDS_PORT"] = str(port)

    print(f"[OK] MoodCards API: http://{host}:{port}  (docs: /docs)")
    try:
        subprocess.run(
            [sys.executable, "-m", "uvicorn", "moodcards.main:app", "--host", host, "--port", str(port)],
            cwd=backend_dir,
            env=env,
            check=True,
        )
    except KeyboardInterrupt:
        print("\n[OK] Stopped")


if __name__ == "__main__":
    main()
