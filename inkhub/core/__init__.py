"""InkHub Core — DB 무관 도메인 모델과 규칙"""
__version__ = "0.1.0"
