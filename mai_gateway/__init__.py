"""
MAI Gateway

HTTP gateway for the MAI Copilot browser extension:
- Origin-aware CORS handling for Sunfire, localhost and extension origins
- Plan lookup against the upstream plans API
- AI-assisted closing scripts generated with Fireworks AI (Llama 3.3 70B)
"""

__version__ = "1.0.0"
