from dishka import make_async_container
from dishka.integrations.fastapi import FastapiProvider

from core.environment.config import Settings
from core.environment.providers import EnvironmentProvider
from codegen.providers import CodegenProvider
from core.logging.providers import LoggerProvider


def build_container(*extra_providers, settings: Settings | None = None):
    """Build the application container, with extra providers if given."""
    return make_async_container(
        EnvironmentProvider(settings),
        LoggerProvider(),
        CodegenProvider(),
        *extra_providers
    )


container = build_container(FastapiProvider())
