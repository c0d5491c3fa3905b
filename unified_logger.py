import json
import time
from typing import Dict

from config import is_debug_mode, is_structured_output


class UnifiedLogger:
    """Unified logging system for all output types"""

    def __init__(self, enable_debug: bool = None, structured: bool = None):
        self.enable_debug = is_debug_mode() if enable_debug is None else enable_debug
        self.structured = is_structured_output() if structured is None else structured

    def log_structured(self, log_type: str, event_name: str, data: Dict, metadata: Dict = None) -> None:
        """Output structured log entries for downstream consumers"""
        if not self.structured:
            self.log_info(f"{log_type} {event_name}")
            return
        log_entry = {
            "timestamp": time.time(),
            "type": log_type,
            "event": event_name,
            "data": data,
            "metadata": metadata or {}
        }
        print(f"[STRUCTURED] {json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'))}", flush=True)

    def log_debug(self, message: str) -> None:
        """Log debug message if debug mode is enabled"""
        if self.enable_debug:
            print(f"DEBUG: {message}", flush=True)

    def log_info(self, message: str) -> None:
        """Log informational message"""
        print(message, flush=True)

    def log_warning(self, message: str) -> None:
        """Log recoverable problem"""
        print(f"WARNING: {message}", flush=True)

    def log_error(self, message: str) -> None:
        """Log error message"""
        print(f"ERROR: {message}", flush=True)


# Global logger instance
unified_logger = UnifiedLogger()
