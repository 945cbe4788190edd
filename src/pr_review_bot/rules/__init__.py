"""
Review Rules

공통 가이드라인과 레포 특화 규칙 로딩
"""

from .resolver import RuleResolver, safe_read_file

__all__ = ['RuleResolver', 'safe_read_file']
