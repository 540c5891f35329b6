"""
Fixed limits and identifiers.

Unlike the values in ``socialnet.settings`` these are not configurable:
the client SDK and the server must agree on them.
"""

# Pagination
MAX_PAGE_SIZE = 100
MAX_CURSOR_LENGTH = 64

# Profile and content
MAX_BIO_LENGTH = 1000
HASHTAG_PATTERN = r"#[A-Za-z0-9_]+"

# Notification.type values
NOTIFICATION_LIKE = "LIKE"
NOTIFICATION_FOLLOW = "FOLLOW"
NOTIFICATION_COMMENT = "COMMENT"

TRENDING_CACHE_KEY = "trending:hashtags"
