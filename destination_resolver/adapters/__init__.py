"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the resolution core to:
- Matching strategies (local fuzzy, semantic and geocoding fallbacks)
- The semantic matcher (OpenAI chat completions)
- Geocoding services (Nominatim, Google via geopy)
- ASR models (faster-whisper)
- The gazetteer file (JSON)
- Caching systems (in-memory, null)
"""
