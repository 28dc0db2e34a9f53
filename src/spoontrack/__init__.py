"""spoontrack：基于“勺子理论”的每日能量记录工具。"""

__version__ = "0.1.0"
