"""
EmailStartingBuilder — entry point for new, replying, forwarding and copied emails.

The starting builder is immutable: `ignoring_defaults()` and
`ignoring_overrides()` return a new starting builder, and its BuilderConfig is
handed by value to every EmailPopulatingBuilder it creates.
"""

from __future__ import annotations

from typing import Optional, Union

from mailforge.builder import EmailPopulatingBuilder
from mailforge.config import BuilderConfig
from mailforge.copying import copying
from mailforge.forward import forwarding
from mailforge.mime.parser import RawMessage
from mailforge.models.email import Email, InternalEmail
from mailforge.quoting import DEFAULT_QUOTING_MARKUP
from mailforge.reply import replying


class EmailStartingBuilder:
    def __init__(self, config: Optional[BuilderConfig] = None):
        self._config = config or BuilderConfig()

    @property
    def config(self) -> BuilderConfig:
        return self._config

    def __repr__(self) -> str:
        return f"EmailStartingBuilder(config={self._config!r})"

    def ignoring_defaults(self) -> EmailStartingBuilder:
        return EmailStartingBuilder(self._config.model_copy(update={"ignore_defaults": True}))

    def ignoring_overrides(self) -> EmailStartingBuilder:
        return EmailStartingBuilder(self._config.model_copy(update={"ignore_overrides": True}))

    def starting_blank(self) -> EmailPopulatingBuilder:
        return EmailPopulatingBuilder(self._config)

    def replying_to(
        self,
        message: Union[Email, RawMessage],
        custom_quoting_template: str = DEFAULT_QUOTING_MARKUP,
    ) -> EmailPopulatingBuilder:
        return replying(message, False, custom_quoting_template, self._config)

    def replying_to_all(
        self,
        message: Union[Email, RawMessage],
        custom_quoting_template: str = DEFAULT_QUOTING_MARKUP,
    ) -> EmailPopulatingBuilder:
        return replying(message, True, custom_quoting_template, self._config)

    def replying(
        self,
        message: Union[Email, RawMessage],
        reply_to_all: bool,
        html_template: str = DEFAULT_QUOTING_MARKUP,
    ) -> EmailPopulatingBuilder:
        return replying(message, reply_to_all, html_template, self._config)

    def forwarding(self, message: Union[Email, RawMessage]) -> EmailPopulatingBuilder:
        return forwarding(message, self._config)

    def copying(self, message: Union[InternalEmail, EmailPopulatingBuilder, RawMessage]) -> EmailPopulatingBuilder:
        return copying(message, self._config)


EmailBuilder = EmailStartingBuilder()
