"""
酒店客房清洁管理后端
"""
