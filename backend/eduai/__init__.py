"""
EduAI backend: auth gate and AI request/response bridge.
"""
