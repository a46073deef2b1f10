"""
Remote service clients.

    - client.py: AimlAudioClient for the AIML /v2/generate/audio endpoint
"""
from .client import AimlAudioClient, authorization_header

__all__ = ["AimlAudioClient", "authorization_header"]
