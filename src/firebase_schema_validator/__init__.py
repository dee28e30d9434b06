"""Schema declaration validation for Firebase-backed data models."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
