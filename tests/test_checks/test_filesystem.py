from __future__ import annotations

import pytest

from envdoctor.checks.filesystem import DirectoryCheck
from envdoctor.doctor import Doctor
from envdoctor.exceptions import FixSkippedError
from envdoctor.models import RunOutcome


class TestDirectoryCheck:
    @pytest.mark.asyncio
    async def test_existing_directory(self, tmp_path):
        result = await DirectoryCheck(tmp_path).diagnose()
        assert result.ok is True

    @pytest.mark.asyncio
    async def test_missing_directory_is_created(self, tmp_path):
        target = tmp_path / "a" / "b"
        check = DirectoryCheck(target)

        assert (await check.diagnose()).ok is False
        assert check.autofix is True
        await check.fix()

        assert target.is_dir()
        assert (await check.diagnose()).ok is True

    @pytest.mark.asyncio
    async def test_file_in_the_way_is_skipped(self, tmp_path):
        target = tmp_path / "cache"
        target.write_text("not a dir")
        check = DirectoryCheck(target)

        result = await check.diagnose()
        assert "not a directory" in result.message
        with pytest.raises(FixSkippedError):
            await check.fix()

    @pytest.mark.asyncio
    async def test_manual_mode(self, tmp_path):
        check = DirectoryCheck(tmp_path / "x", create=False)
        assert check.autofix is False
        assert await check.fix() == f"Create the directory {tmp_path / 'x'}"
        assert not (tmp_path / "x").exists()

    @pytest.mark.asyncio
    async def test_doctor_fixes_directory(self, tmp_path, sink):
        target = tmp_path / "workspace"
        doctor = Doctor(sink=sink)
        doctor.register(DirectoryCheck(target))

        report = await doctor.run()

        assert report.outcome == RunOutcome.AUTO_FIXES_ATTEMPTED
        assert report.to_fix[0].fixed is True
        assert report.healthy is True
        assert target.is_dir()
