"""
enums.py

권한(Role) / 공개 범위(PrivacyLevel) / 에러 코드 등 닫힌 열거형 모음.

이 파일은 정책 엔진(services.roles, services.privacy)과
HTTP 계층, ORM 모델이 공통으로 사용하는 값 타입만 정의한다.
SQLAlchemy / FastAPI 의존성이 없어야 한다.

설계 원칙:
- 문자열 대신 str Enum 사용 (JSON 직렬화 시 값 그대로 노출)
- 값은 클라이언트와 주고받는 wire 포맷과 동일하게 유지

관련 파일:
- fithub.services.roles     : Role 기반 권한 판단
- fithub.services.privacy   : PrivacyLevel / PrivacyGroup 기반 공개 범위 판단
- fithub.models.user        : User 모델

"""

from enum import Enum


"""
사용자 권한(Role) 정의

- MEMBER                 : 기본 회원 (모든 사용자가 유지해야 함)
- ADMIN                  : 관리자
- SUPER_ADMIN            : 최고 관리자 (부여/회수 불가)
- ORGANIZATION_COMMITTEE : 운영진
- COMMUNITY_LEADER       : 커뮤니티 리더
- COMMUNITY_STAR         : 커뮤니티 스타
- GAMER                  : 게이머

"""

class Role(str, Enum):
    MEMBER = "MEMBER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"
    ORGANIZATION_COMMITTEE = "ORGANIZATION_COMMITTEE"
    COMMUNITY_LEADER = "COMMUNITY_LEADER"
    COMMUNITY_STAR = "COMMUNITY_STAR"
    GAMER = "GAMER"


# 프로필 필드 공개 범위 (PUBLIC ⊇ FOLLOWERS ⊇ PRIVATE)
class PrivacyLevel(str, Enum):
    PUBLIC = "PUBLIC"
    FOLLOWERS = "FOLLOWERS"
    PRIVATE = "PRIVATE"


# 공개 범위를 따로 설정할 수 있는 프로필 속성 그룹 (값 = wire key)
class PrivacyGroup(str, Enum):
    EMAIL = "email"
    DATE_OF_BIRTH = "dateOfBirth"
    SPORT_TYPES = "sportTypes"
    SOCIAL_LINKS = "socialLinks"
    AVATAR = "avatar"
    BANNER = "banner"
    DESCRIPTION = "description"
    CITY_REGION = "cityRegion"
    PERSONAL_STATS = "personalStats"
    PERSONAL_ACHIEVEMENTS = "personalAchievements"


"""
관리 행위 거부 사유

정책 엔진은 예외를 던지지 않고 (허용 여부, 사유) 를 반환한다.
HTTP 상태 코드로의 변환은 라우터 계층(fithub.core.errors)에서 수행한다.

"""

class DenyReason(str, Enum):
    NOT_PRIVILEGED = "NOT_PRIVILEGED"
    TARGET_PROTECTED = "TARGET_PROTECTED"
    ROLE_ESCALATION = "ROLE_ESCALATION"
    SUPER_ADMIN_IMMUTABLE = "SUPER_ADMIN_IMMUTABLE"
    SELF_LOCKOUT = "SELF_LOCKOUT"
    SELF_BLOCK = "SELF_BLOCK"
    SUPER_ADMIN_UNBLOCKABLE = "SUPER_ADMIN_UNBLOCKABLE"


# 에러 응답 envelope 의 code 값
class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_BLOCKED = "USER_BLOCKED"
    RESOURCE_ALREADY_EXISTS = "RESOURCE_ALREADY_EXISTS"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
