# -*- coding: utf-8 -*-
from portfolio.infra.db import db

from .api_key import ApiKey

__all__ = ["db", "ApiKey"]
