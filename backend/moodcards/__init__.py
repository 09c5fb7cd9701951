"""
MoodCards backend / 心卡后端
"""

__version__ = "0.1.0"
