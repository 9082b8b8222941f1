"""View state for the Chef and Bartender flows.

One generic machine, instantiated once per flow:

    idle -> processing -> result | error
    result | error -> idle          (reset)
    result -> processing            (another, with the next variation)

Every generation gets a token. Anything that finishes under a token other than
the current one is dropped, so a reset or a newer request always wins.
"""

import asyncio
from enum import Enum
import logging
from typing import Awaitable, Callable, Generic, TypeVar

from domain.errors import ValidationError


logger = logging.getLogger(__name__)


RequestT = TypeVar("RequestT")
ResultT = TypeVar("ResultT")


class ViewState(Enum):
    idle = "idle"
    processing = "processing"
    result = "result"
    error = "error"


class Flow(Generic[RequestT, ResultT]):
    def __init__(
        self,
        name: str,
        run: Callable[[RequestT, int], Awaitable[ResultT]],
        *,
        validate: Callable[[RequestT], None] | None = None,
    ) -> None:
        self.name = name
        self._run = run
        self._validate = validate
        self._listeners: list[Callable[[ResultT], Awaitable[None]]] = []
        self._token = 0
        self.state = ViewState.idle
        self.request: RequestT | None = None
        self.result: ResultT | None = None
        self.error: str | None = None
        self.variation = 0

    def __repr__(self) -> str:
        return f"<Flow(name={self.name}, state={self.state.value})>"

    def subscribe(self, listener: Callable[[ResultT], Awaitable[None]]) -> None:
        self._listeners.append(listener)

    def _transition(self, state: ViewState) -> None:
        logger.debug("%s: %s -> %s", self.name, self.state.value, state.value)
        self.state = state

    async def generate(self, request: RequestT) -> bool:
        """Run the flow for `request`.

        Returns `False` without touching the state when validation fails.
        """
        if self._validate is not None:
            try:
                self._validate(request)
            except ValidationError as e:
                logger.debug("%s: blocked, %s", self.name, e)
                return False

        self._token += 1
        token = self._token
        self.request = request
        self.result = None
        self.error = None
        self._transition(ViewState.processing)

        try:
            result = await self._run(request, self.variation)
        except asyncio.CancelledError:
            if token == self._token:
                self._transition(ViewState.idle)
            raise
        except Exception as e:
            if token != self._token:
                logger.debug("%s: dropping stale failure", self.name)
                return True
            logger.exception("%s: generation failed", self.name)
            self.error = str(e)
            self._transition(ViewState.error)
            return True

        if token != self._token:
            logger.debug("%s: dropping stale result", self.name)
            return True

        self.result = result
        self._transition(ViewState.result)
        for listener in self._listeners:
            await listener(result)
        return True

    async def another(self) -> bool:
        if self.state is not ViewState.result or self.request is None:
            return False
        self.variation += 1
        return await self.generate(self.request)

    def reset(self) -> None:
        self._token += 1
        self.request = None
        self.result = None
        self.error = None
        if self.state is not ViewState.idle:
            self._transition(ViewState.idle)
