# utils/ai.py
import logging

import anthropic

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a helpful and knowledgeable Bible expert. Your purpose is to answer user "
    "questions about the Bible concisely and accurately. Use your deep understanding of "
    "biblical texts, characters, and theological concepts to provide helpful and insightful "
    "responses. Please format your responses clearly using markdown."
)


class AssistantConfigError(RuntimeError):
    """Raised when the assistant is used without an API key."""


class BibleAssistant:
    """Answers free-form questions about the Bible through the Anthropic API."""

    def __init__(self, api_key=None, model='claude-3-haiku-20240307', max_tokens=1024, client=None):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self._client = client

    @classmethod
    def from_config(cls, config):
        return cls(
            api_key=config.get('ANTHROPIC_API_KEY'),
            model=config['AI_MODEL'],
            max_tokens=config['AI_MAX_TOKENS'],
        )

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise AssistantConfigError("Anthropic API key not configured")
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def answer(self, prompt):
        logger.info(f"Sending prompt to Anthropic ({len(prompt)} chars)")
        message = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=SYSTEM_INSTRUCTION,
            messages=[
                {
                    "role": "user",
                    "content": prompt
                }
            ]
        )
        return ''.join(
            block.text for block in message.content if getattr(block, 'type', None) == 'text'
        )
