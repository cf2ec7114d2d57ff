"""速成查字 HTTP 接口"""
