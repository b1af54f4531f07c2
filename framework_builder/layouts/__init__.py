"""Layout algorithms turning documents into render-ready rows and sections."""
