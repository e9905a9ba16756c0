"""
App layer: HTTP 게이트웨이 (FastAPI).

역할:
- multipart/JSON 요청 수신, 응답 형식 결정
- 원격 모델 호출 (providers), 요청 조립/응답 해석 (services)
- 에러 코드 → HTTP status 변환은 main.py에서만
"""
