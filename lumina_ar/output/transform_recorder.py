"""
transform_recorder.py - 세션 결과 기록

프레임별 평활화 자세와 제스처 커밋을 모아 JSON 또는 CSV로 저장합니다.

Version: 1.0
Author: Lumina AR Team
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List
import logging

import numpy as np
import pandas as pd

from ..scene.transform import Transform

logger = logging.getLogger(__name__)


class TransformRecorder:
    """
    프레임 결과 / 커밋 기록기

    Example:
        >>> recorder = TransformRecorder("output", output_format="csv")
        >>> recorder.add_result(frame_result)
        >>> recorder.add_commit(transform)
        >>> recorder.save()
    """

    SUPPORTED_FORMATS = ('json', 'csv')

    def __init__(self, output_dir: str, output_format: str = "json"):
        if output_format not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported output format '{output_format}', "
                f"expected one of {self.SUPPORTED_FORMATS}"
            )

        self.output_dir = Path(output_dir)
        self.output_format = output_format
        self.results: List[Dict[str, Any]] = []
        self.commits: List[Dict[str, Any]] = []

    def add_result(self, result):
        """FrameResult 추가"""
        self.results.append(result.to_row())

    def add_commit(self, transform: Transform):
        """커밋된 변환 추가 (세션 on_update 콜백으로 사용 가능)"""
        entry = transform.to_dict()
        entry['commit_idx'] = len(self.commits)
        self.commits.append(entry)

    def save(self) -> Path:
        """
        결과 저장

        Returns:
            저장된 프레임 결과 파일 경로
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime('%Y%m%d_%H%M%S')

        if self.output_format == 'csv':
            filepath = self.output_dir / f"frames_{stamp}.csv"
            pd.DataFrame(self.results).to_csv(filepath, index=False)

            commits_path = self.output_dir / f"commits_{stamp}.csv"
            pd.json_normalize(self.commits).to_csv(commits_path, index=False)
        else:
            filepath = self.output_dir / f"session_{stamp}.json"
            with open(filepath, 'w') as f:
                json.dump(
                    {'frames': self.results, 'commits': self.commits, 'summary': self.get_summary()},
                    f,
                    indent=2
                )

        logger.info(f"Saved {len(self.results)} frames, {len(self.commits)} commits to {filepath}")
        return filepath

    def get_summary(self) -> Dict[str, Any]:
        """세션 요약"""
        tracked = [r for r in self.results if r['tracking_status'] == 'found']
        summary = {
            'num_frames': len(self.results),
            'num_tracked_frames': len(tracked),
            'num_commits': len(self.commits),
        }

        if tracked:
            positions = np.array([[r['anchor_x'], r['anchor_y'], r['anchor_z']] for r in tracked])
            summary['anchor_position_std'] = positions.std(axis=0).tolist()

        return summary
