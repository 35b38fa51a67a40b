"""
Dataset cleaner - staged cleaning pipeline for LLM fine-tuning data.

Records are pulled from a table store or a CSV file, normalized, and sent to a
chat-completion model that either returns a cleaned copy or rejects them:
  fetch → format → clean → finalize

Every stage persists its output under steps/<run_id>/<stage>/data.json.
"""

__version__ = "1.0.0"
