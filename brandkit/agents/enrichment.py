"""LLM enrichment: text and image+text completion behind one small interface."""
import base64
from typing import Any, List, Optional

from langchain_core.messages import HumanMessage

from brandkit.app.config import Settings
from brandkit.app.errors import EnrichmentFailure
from brandkit.app.logger import logger

# Try to import the LLM providers
try:
    from langchain_openai import ChatOpenAI
    OPENAI_AVAILABLE = True
except ImportError:
    OPENAI_AVAILABLE = False

try:
    from langchain_google_genai import ChatGoogleGenerativeAI
    GOOGLE_AVAILABLE = True
except ImportError:
    GOOGLE_AVAILABLE = False

try:
    from langchain_ollama import ChatOllama
    OLLAMA_AVAILABLE = True
except ImportError:
    OLLAMA_AVAILABLE = False


def image_mime_type(image_bytes: bytes) -> str:
    if image_bytes[:8] == b'\x89PNG\r\n\x1a\n':
        return 'image/png'
    if image_bytes[:2] == b'\xff\xd8':
        return 'image/jpeg'
    if image_bytes[:4] == b'RIFF':
        return 'image/webp'
    return 'image/png'


def response_text(response: Any) -> str:
    """Plain text from a chat model reply (string content or a list of parts)."""
    content = getattr(response, 'content', response)
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, dict):
                parts.append(str(part.get('text', '')))
            else:
                parts.append(str(part))
        return ''.join(parts)
    return str(content)


class EnrichmentService:
    """Fallible completion capability. Implementations raise EnrichmentFailure."""

    def complete_from_text(self, instruction: str) -> str:
        raise NotImplementedError

    def complete_from_image(self, instruction: str, image_bytes: bytes) -> str:
        raise NotImplementedError


class LangChainEnrichmentService(EnrichmentService):
    """Enrichment through a LangChain chat model (OpenAI, Gemini or local Ollama)."""

    def __init__(self, settings: Optional[Settings] = None, llm=None):
        self.settings = settings or Settings()
        self.llm = llm if llm is not None else self._initialize_llm()

    def _initialize_llm(self):
        """Pick the first usable provider, honouring an explicit preference."""
        provider = self.settings.llm_provider
        order = ['openai', 'google', 'ollama'] if provider == 'auto' else [provider]
        for name in order:
            llm = getattr(self, f'_init_{name}')()
            if llm is not None:
                return llm

        logger.warning("⚠ No LLM available - enrichment calls will fail and fields keep their defaults")
        logger.warning("  Set OPENAI_API_KEY, GEMINI_API_KEY, or run Ollama locally")
        return None

    def _init_openai(self):
        if not (OPENAI_AVAILABLE and self.settings.openai_api_key):
            return None
        try:
            llm = ChatOpenAI(
                model=self.settings.openai_model,
                temperature=0.2,
                api_key=self.settings.openai_api_key,
                max_tokens=self.settings.max_tokens,
                timeout=self.settings.llm_timeout,
            )
            logger.info(f"✓ OpenAI LLM ({self.settings.openai_model}) initialized")
            return llm
        except Exception as e:
            logger.warning(f"⚠ OpenAI LLM failed to initialize: {e}")
            return None

    def _init_google(self):
        if not (GOOGLE_AVAILABLE and self.settings.google_api_key):
            return None
        try:
            llm = ChatGoogleGenerativeAI(
                model=self.settings.gemini_model,
                temperature=0.2,
                google_api_key=self.settings.google_api_key,
                max_output_tokens=self.settings.max_tokens,
                timeout=self.settings.llm_timeout,
            )
            logger.info(f"✓ Google Gemini LLM ({self.settings.gemini_model}) initialized")
            return llm
        except Exception as e:
            logger.warning(f"⚠ Google Gemini LLM failed to initialize: {e}")
            return None

    def _init_ollama(self):
        # Local models must be requested explicitly with BRANDKIT_LLM_PROVIDER=ollama
        if not OLLAMA_AVAILABLE or self.settings.llm_provider != 'ollama':
            return None
        try:
            llm = ChatOllama(model=self.settings.ollama_model, temperature=0.2, num_predict=self.settings.max_tokens)
            logger.info(f"✓ Ollama LLM ({self.settings.ollama_model}) initialized")
            return llm
        except Exception as e:
            logger.warning(f"⚠ Ollama LLM not available: {e}")
            return None

    def _invoke(self, content) -> str:
        if self.llm is None:
            raise EnrichmentFailure("No LLM provider configured")
        try:
            response = self.llm.invoke([HumanMessage(content=content)])
        except Exception as e:
            raise EnrichmentFailure(f"LLM call failed: {e}") from e
        text = response_text(response).strip()
        if not text:
            raise EnrichmentFailure("LLM returned an empty reply")
        return text

    def complete_from_text(self, instruction: str) -> str:
        logger.debug(f"Text completion, prompt length {len(instruction)}")
        return self._invoke(instruction)

    def complete_from_image(self, instruction: str, image_bytes: bytes) -> str:
        encoded = base64.b64encode(image_bytes).decode('ascii')
        content: List[dict] = [
            {"type": "text", "text": instruction},
            {"type": "image_url", "image_url": {"url": f"data:{image_mime_type(image_bytes)};base64,{encoded}"}},
        ]
        logger.debug(f"Image completion, {len(image_bytes)} image bytes")
        return self._invoke(content)
