"""
Completion model adapter.

Dependencies: langchain_google_genai, langchain_aws
System role: Text completion for grounded answers
"""

from langchain_aws import ChatBedrockConverse
from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from pdf_qa.configs.models import ModelSettings


def get_chat_model(settings: ModelSettings) -> BaseChatModel:
    """
    Build the configured chat model.

    Args:
        settings: Model configuration

    Returns:
        BaseChatModel: LangChain chat model
    """
    if settings.provider == "bedrock":
        return ChatBedrockConverse(
            model=settings.llm_model,
            region_name=settings.region,
            temperature=settings.temperature,
        )
    return ChatGoogleGenerativeAI(
        model=settings.llm_model,
        temperature=settings.temperature,
    )
