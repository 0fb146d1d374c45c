"""ADHD-DB REST API"""
