"""
어댑터 레이어

외부 자원(SQLite DB, 원장 HTTP API)과의 연동을 담당.
"""
