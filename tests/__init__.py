"""
Test suite for galleryguard.

- unit/models: protection config and gallery model
- unit/platform: in-memory event source
- unit/services: detectors, renderer, watermark and orchestrator
- unit/ui: Streamlit components, handlers and pages
"""
