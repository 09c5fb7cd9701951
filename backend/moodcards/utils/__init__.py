"""
Shared helpers / 通用工具
"""
