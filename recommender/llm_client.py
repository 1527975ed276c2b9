"""
Structured-Intent LLM Client

Builds the chat model used to turn a shopping request into intent JSON.
Groq exposes an OpenAI-compatible API, so LangChain's ChatOpenAI is used.
"""

from typing import Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

INTENT_SYSTEM_PROMPT = """
You are an assistant that extracts structured product intent from a user's short request.
Return ONLY JSON in this exact format (no explanation, no other text):

{
  "category": string or null,
  "brand": string or null,
  "price_min": number or null,
  "price_max": number or null,
  "features": []
}

Rules/Examples:
- If the user mentions phone/mobile/smartphone, category -> "smartphones".
- Brands: Apple, Samsung, Realme, Oppo, Vivo, Xiaomi, OnePlus, Google, Motorola, Nokia, Sony.
- Price examples:
  - "below 500" or "under 500" => price_max = 500
  - "above 500" or "over 500" => price_min = 500
  - "between 200 and 500" => both numbers
  - Use numbers only, no currency symbols.
- Features: array of short strings like "good camera", "long battery", "gaming", "4G", "5G".
- If something is not mentioned, return null or empty array.
- OUTPUT STRICT JSON ONLY.
"""


def build_chat_model(
    api_key: str,
    model: str,
    base_url: str,
) -> Optional[ChatOpenAI]:
    """
    Create the chat model, or None when no API key is configured.

    Retries are disabled: a failed call falls back to local parsing instead.
    """
    if not api_key:
        return None
    return ChatOpenAI(
        model=model,
        api_key=api_key,
        base_url=base_url,
        temperature=0,
        max_retries=0,
    )


def build_intent_messages(user_text: str) -> list:
    return [
        SystemMessage(content=INTENT_SYSTEM_PROMPT),
        HumanMessage(content=user_text),
    ]
