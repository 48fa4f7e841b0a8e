"""unillm.config.defaults
======================

Central place for small, stable default values used across the package.
Values can be overridden via environment variables or a config file (see
``unillm.config``) but provide sensible fallbacks for local development and
tests. Only plain constants live here; nothing is imported from provider
packages to avoid cycles.
"""

from __future__ import annotations

from ..base.constants import (
    MODEL_CLAUDE_2,
    MODEL_CLAUDE_2_1,
    MODEL_CLAUDE_3_5_HAIKU_20241022,
    MODEL_CLAUDE_3_5_HAIKU_LATEST,
    MODEL_CLAUDE_3_5_SONNET_20240620,
    MODEL_CLAUDE_3_5_SONNET_20241022,
    MODEL_CLAUDE_3_5_SONNET_LATEST,
    MODEL_CLAUDE_3_HAIKU_20240307,
    MODEL_CLAUDE_3_OPUS_20240229,
    MODEL_CLAUDE_3_SONNET_20240229,
    MODEL_GEMINI_1_5_FLASH,
    MODEL_GEMINI_1_5_FLASH_8B,
    MODEL_GEMINI_1_5_PRO,
    MODEL_GEMINI_2_0_FLASH,
    MODEL_GEMINI_2_0_FLASH_LITE_001,
    MODEL_GPT_4O,
    MODEL_GPT_4O_MINI,
    MODEL_O3_MINI,
)

# ---- Model allow-lists ----
# Requests naming any other model fail with ErrorCode.UNSUPPORTED before any
# network call is made.
OPENAI_SUPPORTED_MODELS = (
    MODEL_O3_MINI,
    MODEL_GPT_4O,
    MODEL_GPT_4O_MINI,
)

ANTHROPIC_SUPPORTED_MODELS = (
    MODEL_CLAUDE_2,
    MODEL_CLAUDE_2_1,
    MODEL_CLAUDE_3_OPUS_20240229,
    MODEL_CLAUDE_3_SONNET_20240229,
    MODEL_CLAUDE_3_5_SONNET_20240620,
    MODEL_CLAUDE_3_5_SONNET_20241022,
    MODEL_CLAUDE_3_5_SONNET_LATEST,
    MODEL_CLAUDE_3_HAIKU_20240307,
    MODEL_CLAUDE_3_5_HAIKU_LATEST,
    MODEL_CLAUDE_3_5_HAIKU_20241022,
)

GEMINI_SUPPORTED_MODELS = (
    MODEL_GEMINI_2_0_FLASH,
    MODEL_GEMINI_2_0_FLASH_LITE_001,
    MODEL_GEMINI_1_5_FLASH,
    MODEL_GEMINI_1_5_FLASH_8B,
    MODEL_GEMINI_1_5_PRO,
)

# Local daemon models vary per machine; instances may pass their own list.
OLLAMA_SUPPORTED_MODELS = (
    "llama3.2:3b",
    "llama3.2",
    "llama3.1:8b",
    "mistral",
    "qwen2.5:7b",
    "llava",
    "gpt-oss:20b",
)

# ---- Provider-specific sane defaults ----
OPENAI_DEFAULT_MODEL = MODEL_GPT_4O_MINI
# top_p sent when the request leaves it unset
OPENAI_DEFAULT_TOP_P = 1.0
# Models that accept the reasoning_effort knob, and the value sent for them.
OPENAI_REASONING_MODELS = (MODEL_O3_MINI,)
OPENAI_REASONING_EFFORT = "high"
AZURE_OPENAI_DEFAULT_API_VERSION = "2023-05-15"

ANTHROPIC_DEFAULT_MODEL = MODEL_CLAUDE_3_5_SONNET_LATEST
# The Messages API requires max_tokens; used when the request leaves it unset.
ANTHROPIC_DEFAULT_MAX_TOKENS = 4096
VERTEX_AUTH_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
# Number of leading token characters written to the vertex.token log event.
VERTEX_TOKEN_LOG_PREFIX = 10

GEMINI_DEFAULT_MODEL = MODEL_GEMINI_2_0_FLASH
# Temperature sent to Gemini when the request leaves it unset: the smallest
# positive float32, i.e. effectively greedy decoding. An explicit 0.0 is sent
# unchanged.
GEMINI_UNSET_TEMPERATURE = 1.401298464324817e-45

OLLAMA_DEFAULT_MODEL = "llama3.2:3b"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"

# ---- Streaming ----
# Capacity of the queue bridging push-style transports into pull streams.
STREAM_BRIDGE_QUEUE_CAPACITY = 100
# Seconds a blocked producer waits before re-checking cancellation.
STREAM_BRIDGE_PUT_POLL_SECONDS = 0.05

# ---- HTTP ----
HTTP_DEFAULT_TIMEOUT_SECONDS = 120.0
HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0
