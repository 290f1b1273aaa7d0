"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- ledger: 거래처 매출/쌀 매입 원장, 거래처 목록
- reports: 일일 리포트, 재무 현황
- entries: 분개 생성/수정/취소
"""
