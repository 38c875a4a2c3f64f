"""
Tests for the Product Id/Version update: validation rules and byte-preserving patching.
"""
import os
import stat
import uuid
import pytest
from xml.etree.ElementTree import ParseError

from wixfrag.core.patcher import ProductPatcherImpl, validate_product_id, validate_product_version
from wixfrag.core.models import ProductUpdateError

PRODUCT_ID = "9c2f1c1e-5b7a-4d2b-9c43-8b1a3f0e6d55"

PRODUCT_SOURCE = (
    b'<?xml version="1.0" encoding="utf-8"?>\n'
    b'<!-- <Product Id="not-this-one" Version="0.0"> -->\n'
    b'<Wix xmlns="http://schemas.microsoft.com/wix/2006/wi">\n'
    b"  <Product Id='*'   Name=\"Demo\" Language=\"1033\"\n"
    b'           Version="1.0.0.0" Manufacturer="Acme" UpgradeCode="6f1c2f63-1d58-4b8a-9d1b-0d0a5a3f7e11">\n'
    b'    <Package InstallerVersion="200" Compressed="yes" />\n'
    b'  </Product>\n'
    b'</Wix>\n'
)


@pytest.fixture
def product_file(temp_dir):
    path = temp_dir / "Product.wxs"
    path.write_bytes(PRODUCT_SOURCE)
    return path


class TestValidation:

    def test_empty_id_generates_new_guid(self):
        generated = validate_product_id("")
        assert uuid.UUID(generated)
        assert generated == generated.lower()

    def test_none_id_generates_new_guid(self):
        assert validate_product_id(None) != validate_product_id(None)

    @pytest.mark.parametrize("value", [
        PRODUCT_ID, PRODUCT_ID.upper(), "{" + PRODUCT_ID + "}", "(" + PRODUCT_ID + ")", PRODUCT_ID.replace("-", ""),
    ])
    def test_valid_id_is_kept(self, value):
        assert validate_product_id(value) == value

    @pytest.mark.parametrize("value", [
        "not-a-guid", "1234", PRODUCT_ID + "0", "urn:uuid:" + PRODUCT_ID, "{" + PRODUCT_ID,
        "{" + PRODUCT_ID + ")", "9c2f-1c1e5b7a-4d2b-9c43-8b1a3f0e6d55",
    ])
    def test_invalid_id_raises(self, value):
        with pytest.raises(ProductUpdateError, match="Product Id is not a valid Guid"):
            validate_product_id(value)

    @pytest.mark.parametrize("value", ["1.0", "1.2.3", "1.2.3.4", "0.0.0.0", "2147483647.0"])
    def test_valid_versions(self, value):
        assert validate_product_version(value) == value

    @pytest.mark.parametrize("value", ["", None, "1", "1.2.3.4.5", "1.a", "v1.0", "1..2", "2147483648.0", "-1.0"])
    def test_invalid_versions_raise(self, value):
        with pytest.raises(ProductUpdateError, match="Product Version is not a valid"):
            validate_product_version(value)


class TestProductPatcher:

    def test_updates_only_the_two_attributes(self, product_file):
        assert ProductPatcherImpl().update(str(product_file), PRODUCT_ID, "2.1.0.7")

        expected = (
            PRODUCT_SOURCE
            .replace(b"Id='*'", f"Id='{PRODUCT_ID}'".encode())
            .replace(b'Version="1.0.0.0"', b'Version="2.1.0.7"')
        )
        assert product_file.read_bytes() == expected

    def test_comment_with_product_lookalike_is_untouched(self, product_file):
        ProductPatcherImpl().update(str(product_file), PRODUCT_ID, "2.0")
        assert b'<!-- <Product Id="not-this-one" Version="0.0"> -->' in product_file.read_bytes()

    def test_missing_attributes_are_appended(self, temp_dir):
        path = temp_dir / "Product.wxs"
        path.write_bytes(
            b'<Wix xmlns="http://schemas.microsoft.com/wix/2006/wi"><Product Name="Demo"></Product></Wix>'
        )

        ProductPatcherImpl().update(str(path), PRODUCT_ID, "3.0")

        assert path.read_bytes() == (
            b'<Wix xmlns="http://schemas.microsoft.com/wix/2006/wi">'
            b'<Product Name="Demo" Id="' + PRODUCT_ID.encode() + b'" Version="3.0"></Product></Wix>'
        )

    def test_missing_product_returns_false_and_leaves_file(self, temp_dir):
        path = temp_dir / "Fragment.wxs"
        original = b'<Wix xmlns="http://schemas.microsoft.com/wix/2006/wi"><Fragment /></Wix>'
        path.write_bytes(original)

        assert ProductPatcherImpl().update(str(path), PRODUCT_ID, "1.0") is False
        assert path.read_bytes() == original

    def test_product_outside_wix_namespace_is_not_found(self, temp_dir):
        path = temp_dir / "Other.wxs"
        original = b"<Wix><Product Id='x' Version='1.0' /></Wix>"
        path.write_bytes(original)

        assert ProductPatcherImpl().update(str(path), PRODUCT_ID, "1.0") is False
        assert path.read_bytes() == original

    def test_malformed_xml_raises_parse_error(self, temp_dir):
        path = temp_dir / "Broken.wxs"
        path.write_bytes(b"<Wix><Product></Wix>")
        with pytest.raises(ParseError):
            ProductPatcherImpl().update(str(path), PRODUCT_ID, "1.0")

    def test_missing_file_raises(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            ProductPatcherImpl().update(str(temp_dir / "nope.wxs"), PRODUCT_ID, "1.0")

    @pytest.mark.skipif(os.name == "nt" or getattr(os, "geteuid", lambda: 1)() == 0,
                        reason="read-only files are writable for root")
    def test_read_only_flag_is_cleared(self, product_file):
        os.chmod(product_file, stat.S_IREAD)

        assert ProductPatcherImpl().update(str(product_file), PRODUCT_ID, "1.5")
        assert os.stat(product_file).st_mode & stat.S_IWRITE
        assert b'Version="1.5"' in product_file.read_bytes()

    def test_attribute_value_is_escaped(self):
        data = b'<Product Id="old" Version="1.0">'
        patched = ProductPatcherImpl.patch_product_tag(data, [("Id", 'a"b&c')])
        assert patched == b'<Product Id="a&quot;b&amp;c" Version="1.0">'

    def test_prefixed_product_tag_is_patched(self):
        data = b'<w:Product Version="1.0" />'
        patched = ProductPatcherImpl.patch_product_tag(data, [("Version", "2.0")])
        assert patched == b'<w:Product Version="2.0" />'

    def test_attribute_lookalike_inside_another_value_is_untouched(self):
        data = b'<Product Name="Demo Id=\'x\'" Id="old" Version="1.0">'
        patched = ProductPatcherImpl.patch_product_tag(data, [("Id", "NEW"), ("Version", "2.0")])
        assert patched == b'<Product Name="Demo Id=\'x\'" Id="NEW" Version="2.0">'

    def test_similarly_named_attribute_is_not_matched(self):
        data = b'<Product ProductId="keep" Id="old" xml:Version="keep">'
        patched = ProductPatcherImpl.patch_product_tag(data, [("Id", "NEW"), ("Version", "2.0")])
        assert patched == b'<Product ProductId="keep" Id="NEW" xml:Version="keep" Version="2.0">'

    def test_lookalike_in_value_with_no_real_attribute_appends(self):
        data = b"<Product Name='Id=\"x\"'>"
        patched = ProductPatcherImpl.patch_product_tag(data, [("Id", "NEW")])
        assert patched == b"<Product Name='Id=\"x\"' Id=\"NEW\">"
