from enum import Enum
import logging
import os

import openai
from openai.types.chat import ChatCompletionMessageParam

from domain.errors import MissingCredentialError, NetworkError


logger = logging.getLogger(__name__)

TIMEOUT = 60 * 2
DEFAULT_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4-turbo-preview")


class OutputFormat(Enum):
    freeform = "freeform"
    json = "json"


def openai_client_factory(api_key: str) -> openai.AsyncClient:
    # Each call is billed, failures surface straight away.
    return openai.AsyncClient(api_key=api_key, timeout=TIMEOUT, max_retries=0)


class ModelGateway:
    """Sends one prompt to the chat completions endpoint and returns the text.

    Schema conformance of JSON answers is the caller's business.
    """

    def __init__(
        self,
        openai_client: openai.AsyncClient | None = None,
        *,
        api_key: str | None = None,
        model: str | None = None,
    ) -> None:
        self._openai_client = openai_client
        self.api_key = os.environ.get("OPENAI_API_KEY") if api_key is None else api_key
        self.model = DEFAULT_MODEL if model is None else model

    @property
    def openai_client(self) -> openai.AsyncClient:
        if self._openai_client is None:
            if not self.api_key:
                raise MissingCredentialError("Missing API key. Set OPENAI_API_KEY.")
            self._openai_client = openai_client_factory(self.api_key)
        return self._openai_client

    async def generate(
        self,
        prompt: str,
        output_format: OutputFormat = OutputFormat.freeform,
    ) -> str:
        client = self.openai_client
        logger.debug("Requesting %s completion from %s", output_format.value, self.model)
        messages: list[ChatCompletionMessageParam] = [{"role": "user", "content": prompt}]

        try:
            if output_format is OutputFormat.json:
                resp = await client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    response_format={"type": "json_object"},
                )
            else:
                resp = await client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                )
        except openai.APIError as e:
            logger.warning("Completion failed: %s", e)
            raise NetworkError(str(e)) from e

        ans = resp.choices[0].message.content or ""
        return ans.strip()

    async def close(self) -> None:
        if self._openai_client is not None:
            await self._openai_client.close()
