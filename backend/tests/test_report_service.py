"""Tests for repository statistics and report data"""
import os
import pytest

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from models import FileRecord
from services.report_service import (
    build_report, build_statistics, format_file_size, report_file_name, REPORT_TITLE
)


@pytest.fixture
def files():
    return [
        FileRecord('src/Orders.cs', classification='logic', size=2048),
        FileRecord('src/Billing.cs', classification='logic', size=1024),
        FileRecord('src/Startup.cs', classification='boilerplate', size=512),
        FileRecord('src/Broken.cs', classification='error', size=0),
    ]


class TestFormatFileSize:

    @pytest.mark.parametrize('size, expected', [
        (0, '0 Bytes'),
        (None, '0 Bytes'),
        (512, '512 Bytes'),
        (1024, '1 KB'),
        (1536, '1.5 KB'),
        (1048576, '1 MB'),
        (5 * 1024 ** 3, '5 GB'),
    ])
    def test_units(self, size, expected):
        assert format_file_size(size) == expected


class TestBuildStatistics:

    def test_counts_and_percentages(self, files):
        stats = build_statistics(files)

        assert stats['totalFiles'] == 4
        assert stats['logicFiles'] == 2
        assert stats['boilerplateFiles'] == 1
        assert stats['errorFiles'] == 1
        assert stats['logicPercentage'] == 50
        assert stats['boilerplatePercentage'] == 25
        assert stats['totalSize'] == 3584
        assert stats['averageSize'] == 896
        assert stats['averageSizeDisplay'] == '896 Bytes'

    def test_no_files(self):
        stats = build_statistics([])

        assert stats['totalFiles'] == 0
        assert stats['logicPercentage'] == 0
        assert stats['averageSizeDisplay'] == '0 Bytes'


class TestBuildReport:

    def test_report_layout(self, files):
        report = build_report(files, 'https://github.com/acme/shop')

        assert report['title'] == REPORT_TITLE
        assert report['repository'] == 'https://github.com/acme/shop'
        assert report['totalFiles'] == 4
        assert report['classificationSummary'][1] == ['Logic', 2, '50%']
        assert report['classificationSummary'][-1] == ['Total', 4, '100%']
        assert report['files'][0] == [1, 'src/Orders.cs', 'logic']
        assert report['files'][3] == [4, 'src/Broken.cs', 'error']
        assert report['fileName'] == 'shop-analysis-report.pdf'

    def test_file_name_from_url(self):
        assert report_file_name('https://github.com/acme/shop/') == 'shop-analysis-report.pdf'
        assert report_file_name('') == 'repository-analysis-report.pdf'
