"""
App layer: 리포트 export 진입점.

역할:
- format 검증, 렌더러 선택, artifact 조립
- 접근 권한 검사/전송은 호출자 책임
"""
