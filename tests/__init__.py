# tests\__init__.py
"""
Test Suite for the user service demo and the image build descriptor.

Organization:
- `core`: Domain models and services.
- `adapters`: Controller and HTTP endpoints with mocked services.
- `mocking`: Worked examples of spies, argument capture, relaxed mocks and
  call verification against the demo services.
- `imagebuild`: Descriptor validation, Dockerfile rendering, build command, CLI.
"""
