"""modules/tool_usage — Clock arithmetic."""
