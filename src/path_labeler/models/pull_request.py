"""
Pull Request Data Models

GitHub API 응답을 검증하는 데이터 모델들
"""

import base64
from typing import List, Optional
from pydantic import BaseModel, validator


class LabelInfo(BaseModel):
    """PR에 부착된 라벨"""
    name: str


class PullRequestInfo(BaseModel):
    """라벨 조정에 필요한 PR 정보"""
    number: int
    labels: List[LabelInfo] = []
    head_sha: Optional[str] = None

    @validator('number')
    def validate_number(cls, v):
        if v <= 0:
            raise ValueError('PR number must be positive')
        return v

    @classmethod
    def from_api(cls, data: dict) -> "PullRequestInfo":
        """GitHub pulls API 응답에서 생성"""
        return cls(
            number=data['number'],
            labels=data.get('labels') or [],
            head_sha=(data.get('head') or {}).get('sha'),
        )

    @property
    def label_names(self) -> List[str]:
        """현재 라벨 이름 목록"""
        return [label.name for label in self.labels]


class PullRequestFile(BaseModel):
    """PR에서 변경된 파일"""
    filename: str

    @validator('filename')
    def validate_filename(cls, v):
        if not v:
            raise ValueError('Filename must not be empty')
        return v


class RepositoryContent(BaseModel):
    """contents API로 받은 파일 내용"""
    path: str
    content: str
    encoding: str = 'base64'

    @validator('encoding')
    def validate_encoding(cls, v):
        if v not in {'base64', 'utf-8'}:
            raise ValueError(f'Unsupported content encoding: {v}')
        return v

    @property
    def text(self) -> str:
        """디코딩된 파일 내용"""
        if self.encoding == 'base64':
            return base64.b64decode(self.content).decode('utf-8')
        return self.content
