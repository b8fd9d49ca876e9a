"""开发工具"""
