"""Module entrypoint.

Allows:
    python -m nginx_log_insight
"""

from __future__ import annotations

from nginx_log_insight.server.log_server import main

if __name__ == "__main__":
    main()
