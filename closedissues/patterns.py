from __future__ import annotations

import re

URL_HOST_PATTERN = r"[-a-zA-Z0-9@:%._\+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
URL_PATH_PATTERN = r"(?:[-a-zA-Z0-9()@:%_\+.~#?&/=]*)"

URL_RX = re.compile(rf"https?://(?:www\.)?{URL_HOST_PATTERN}{URL_PATH_PATTERN}")
