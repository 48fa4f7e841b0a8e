"""Vendor model identifiers.

Only a subset is accepted by each provider's allow-list (see
``unillm.config.defaults``); the rest are kept for callers that build their
own catalogue.
"""

# OpenAI
MODEL_CHATGPT_4O_LATEST = "chatgpt-4o-latest"
MODEL_GPT_4O = "gpt-4o"
MODEL_GPT_4O_2024_08_06 = "gpt-4o-2024-08-06"
MODEL_GPT_4O_MINI = "gpt-4o-mini"
MODEL_GPT_4O_MINI_2024_07_18 = "gpt-4o-mini-2024-07-18"
MODEL_O1 = "o1"
MODEL_O1_2024_12_17 = "o1-2024-12-17"
MODEL_O1_PREVIEW = "o1-preview"
MODEL_O1_PREVIEW_2024_09_12 = "o1-preview-2024-09-12"
MODEL_O1_MINI = "o1-mini"
MODEL_O1_MINI_2024_09_12 = "o1-mini-2024-09-12"
MODEL_O3_MINI = "o3-mini"
MODEL_O3_MINI_2025_01_31 = "o3-mini-2025-01-31"

# Anthropic
MODEL_CLAUDE_2 = "claude-2.0"
MODEL_CLAUDE_2_1 = "claude-2.1"
MODEL_CLAUDE_3_OPUS_20240229 = "claude-3-opus-20240229"
MODEL_CLAUDE_3_SONNET_20240229 = "claude-3-sonnet-20240229"
MODEL_CLAUDE_3_5_SONNET_20240620 = "claude-3-5-sonnet-20240620"
MODEL_CLAUDE_3_5_SONNET_20241022 = "claude-3-5-sonnet-20241022"
MODEL_CLAUDE_3_5_SONNET_LATEST = "claude-3-5-sonnet-latest"
MODEL_CLAUDE_3_HAIKU_20240307 = "claude-3-haiku-20240307"
MODEL_CLAUDE_3_5_HAIKU_LATEST = "claude-3-5-haiku-latest"
MODEL_CLAUDE_3_5_HAIKU_20241022 = "claude-3-5-haiku-20241022"

# Gemini
MODEL_GEMINI_2_0_FLASH = "gemini-2.0-flash"
MODEL_GEMINI_2_0_FLASH_LITE_001 = "gemini-2.0-flash-lite-001"
MODEL_GEMINI_1_5_FLASH = "gemini-1.5-flash"
MODEL_GEMINI_1_5_FLASH_8B = "gemini-1.5-flash-8b"
MODEL_GEMINI_1_5_PRO = "gemini-1.5-pro"
