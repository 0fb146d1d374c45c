"""CLI 수집 스크립트"""
