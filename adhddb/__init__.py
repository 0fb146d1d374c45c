"""ADHD-DB - ADHD 약물 다국어 데이터베이스"""

__version__ = "1.0.0"
