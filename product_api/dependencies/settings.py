"""
Dependency injection for the settings the application was built with
"""

from fastapi import Request

from product_api.core.config import Config


def get_settings(request: Request) -> Config:
    return request.app.state.settings
