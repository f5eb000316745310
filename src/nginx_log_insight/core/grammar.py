"""Combined log format grammar (Nginx default `combined`).

    $remote_addr - $remote_user [$time_local] "$request" $status $body_bytes_sent "$http_referer" "$http_user_agent"
"""

from __future__ import annotations

import re

TIMESTAMP_FORMAT = "%d/%b/%Y:%H:%M:%S %z"

# Status is captured loosely so a bad token is reported as an invalid status
# instead of a structural mismatch. Anything after the user agent is ignored.
COMBINED_LOG_PATTERN = re.compile(
    r"^(?P<client_addr>\S+) - (?P<remote_user>\S+) "
    r"\[(?P<timestamp>[^\]]*)\] "
    r'"(?P<method>\S+) (?P<path>\S+) (?P<protocol>[^"\s]+)" '
    r"(?P<status>\S+) "
    r"(?P<body_bytes>\d+|-) "
    r'"(?P<referer>[^"]*)" '
    r'"(?P<user_agent>[^"]*)"'
)

STATUS_MIN = 100
STATUS_MAX = 599

EMPTY_FIELD = "-"
