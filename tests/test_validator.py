import io
import tempfile
import unittest
from contextlib import redirect_stdout

from assetpacker.core.validator import (
    check_source_dir,
    parse_request,
    strip_trailing_sep,
    validate_pack_inputs,
)
from assetpacker.errors import UsageError, ValidationError
from assetpacker.models import PackRequest


def _args(version="1.0", **extra):
    argv = ["-s", "assets", "-o", "out", "-n", "rpg_asset_pack", "-v", version]
    for flag, value in extra.items():
        argv.append(flag)
        if value is not None:
            argv.append(value)
    return argv


class TestValidatePackInputs(unittest.TestCase):
    def test_each_missing_field_has_its_own_code(self):
        errs = validate_pack_inputs(None, "", "  ", None)
        codes = {r.code for r in errs}
        self.assertEqual(codes, {"SOURCE_MISSING", "OUTPUT_MISSING", "NAME_MISSING", "VERSION_MISSING"})
        self.assertEqual(len(errs), 4)
        self.assertEqual({r.flag for r in errs},
                         {"--source-dir", "--output-dir", "--asset-pack-name", "--version"})

    def test_version_format(self):
        for ok in ("1.0", "0.1", "12.34"):
            self.assertEqual(validate_pack_inputs("a", "b", "c", ok), [], ok)

        for bad in ("1", "1.0.0", "v1.0", "1.", ".1", "1.0\n"):
            errs = validate_pack_inputs("a", "b", "c", bad)
            self.assertEqual([r.code for r in errs], ["VERSION_INVALID"], bad)

        errs = validate_pack_inputs("a", "b", "c", "")
        self.assertEqual([r.code for r in errs], ["VERSION_MISSING"])

    def test_pack_name_with_separator_rejected(self):
        errs = validate_pack_inputs("a", "b", "packs/rpg", "1.0")
        self.assertEqual([r.code for r in errs], ["NAME_INVALID"])


class TestParseRequest(unittest.TestCase):
    def test_valid_request(self):
        req = parse_request(_args())
        self.assertEqual(
            req,
            PackRequest(source_dir="assets", output_root="out", pack_name="rpg_asset_pack",
                        version="1.0", dry_run=False),
        )

    def test_long_flags_and_dry_run(self):
        req = parse_request([
            "--source-dir", "assets", "--output-dir=out/", "--asset-pack-name", "pack/",
            "--version", "2.13", "--dry-run",
        ])
        self.assertTrue(req.dry_run)
        self.assertEqual(req.output_root, "out")
        self.assertEqual(req.pack_name, "pack")
        self.assertEqual(req.version, "2.13")

    def test_rejected_versions_raise_validation_error(self):
        for bad in ("1", "1.0.0", "v1.0"):
            with self.assertRaises(ValidationError) as cm:
                parse_request(_args(version=bad))
            self.assertEqual(cm.exception.results[0].code, "VERSION_INVALID")

        with self.assertRaises(ValidationError):
            parse_request(_args(version=""))

    def test_missing_fields_reported_individually(self):
        with self.assertRaises(ValidationError) as cm:
            parse_request(["-s", "assets", "-d"])
        codes = [r.code for r in cm.exception.results]
        self.assertEqual(codes, ["OUTPUT_MISSING", "NAME_MISSING", "VERSION_MISSING"])

    def test_value_flag_requires_non_empty_argument(self):
        cases = [
            ["-s", "-o", "out"],
            ["-o", ""],
            ["--asset-pack-name=", "-s", "a"],
            ["-s", "a", "-v"],
        ]
        for argv in cases:
            with self.assertRaises(ValidationError) as cm:
                parse_request(argv)
            res = cm.exception.results[0]
            self.assertEqual(res.code, "ARG_EMPTY", argv)
            self.assertIn("requires a non-empty argument", res.message)

    def test_bundled_short_flags(self):
        for argv in (["-ds"], ["-n", "p", "-dv"], ["-ds", "-o", "out"]):
            with self.assertRaises(ValidationError) as cm:
                parse_request(argv)
            res = cm.exception.results[0]
            self.assertEqual(res.code, "ARG_EMPTY", argv)
            self.assertIn("requires a non-empty argument", res.message)

        req = parse_request(["-dsassets", "-o", "out", "-n", "p", "-dv", "1.0"])
        self.assertEqual(req.source_dir, "assets")
        self.assertEqual(req.version, "1.0")
        self.assertTrue(req.dry_run)

    def test_unknown_flag_is_usage_error(self):
        with self.assertRaises(UsageError) as cm:
            parse_request(_args(**{"--overwrite": None}))
        self.assertIn("usage:", cm.exception.usage)
        self.assertEqual(cm.exception.exit_code, 2)

        # no prefix matching of long flags
        with self.assertRaises(UsageError):
            parse_request(["--source", "a", "-o", "b", "-n", "c", "-v", "1.0"])

    def test_help_short_circuits(self):
        for argv in (["-h"], ["--bogus", "--help"], ["-v", "1.0.0", "-s", "-h"]):
            buf = io.StringIO()
            with redirect_stdout(buf), self.assertRaises(SystemExit) as cm:
                parse_request(argv)
            self.assertEqual(cm.exception.code, 0, argv)
            self.assertIn("--asset-pack-name", buf.getvalue())


class TestHelpers(unittest.TestCase):
    def test_strip_trailing_sep(self):
        self.assertEqual(strip_trailing_sep("out/"), "out")
        self.assertEqual(strip_trailing_sep("out//"), "out")
        self.assertEqual(strip_trailing_sep("out"), "out")
        self.assertEqual(strip_trailing_sep("/"), "/")

    def test_check_source_dir(self):
        with tempfile.TemporaryDirectory() as td:
            check_source_dir(PackRequest(td, "out", "p", "1.0"))

            with self.assertRaises(ValidationError) as cm:
                check_source_dir(PackRequest(td + "/missing", "out", "p", "1.0"))
            self.assertEqual(cm.exception.results[0].code, "SOURCE_NOT_DIR")


if __name__ == "__main__":
    unittest.main()
