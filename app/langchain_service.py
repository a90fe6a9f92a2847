from typing import Protocol
import logging

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_openai import ChatOpenAI

from app.core.config import Settings

logger = logging.getLogger(__name__)


class SummaryGenerator(Protocol):
    """Anything that turns a prompt into generated text"""

    async def generate(self, prompt: str) -> str:
        ...


class LangChainSummaryGenerator:
    """Summary generator backed by a LangChain chat model.

    The instance is shared across requests and keeps no per-request state.
    """

    def __init__(self, llm: BaseChatModel):
        self.llm = llm
        self.chain = llm | StrOutputParser()

    @classmethod
    def from_settings(cls, settings: Settings) -> "LangChainSummaryGenerator":
        """Initialize the OpenAI chat model from configuration"""
        llm = ChatOpenAI(
            model=settings.llm_model,
            temperature=settings.llm_temperature,
            api_key=settings.openai_api_key,
        )
        logger.info(f"Summary generator using model {settings.llm_model}")
        return cls(llm)

    async def generate(self, prompt: str) -> str:
        response = await self.chain.ainvoke(prompt)
        return response.strip()
