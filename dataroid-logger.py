"""
mitmproxy addon that decodes Dataroid collector requests.

Usage:
    mitmdump -s dataroid-logger.py
"""

from mitmproxy import http
from typing import Dict, Optional, Union

from providers import get_providers, get_provider_for_url
from unified_logger import unified_logger

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Startup message
unified_logger.log_info("Dataroid request logger ready!")
unified_logger.log_info(f"Configured Providers: {len(get_providers())} ({', '.join(p.name for p in get_providers())})")
unified_logger.log_info("-" * 50)


class UnifiedRequestProcessor:
    """Unified request processing pipeline"""

    def process_request(self, flow: http.HTTPFlow) -> None:
        """Decode a request if a provider recognizes its URL"""
        url = flow.request.url
        provider = get_provider_for_url(url)
        if provider is None:
            return

        try:
            post_data = self._extract_post_data(flow)
            parsed = provider.parse_url(url, post_data)
        except Exception as e:
            unified_logger.log_error(f"PARSE_ERROR: {str(e)[:100]}")
            return

        unified_logger.log_debug(f"{provider.name}: {len(parsed['data'])} fields from {flow.request.method} {url}")
        unified_logger.log_structured("provider_request", provider.key, parsed,
                                      {"request_url": url, "method": flow.request.method})

    def _extract_post_data(self, flow: http.HTTPFlow) -> Optional[Union[str, Dict[str, str]]]:
        """Extract the POST body as text, or as a mapping for form-encoded data"""
        if not flow.request.content:
            return None

        content_type = flow.request.headers.get("content-type", "")
        if FORM_CONTENT_TYPE in content_type:
            return dict(flow.request.urlencoded_form)

        return flow.request.get_text()


# Global request processor instance
request_processor = UnifiedRequestProcessor()


def request(flow: http.HTTPFlow) -> None:
    """Main request handler with unified processing"""
    request_processor.process_request(flow)
