from wixfrag.core.models import IdentityMode

IDENTITY_MODE_ALIASES = {
    "linear": IdentityMode.LINEAR,
    "bucketed": IdentityMode.BUCKETED,
}

IDENTITY_MODE_CHOICES = list(IDENTITY_MODE_ALIASES.keys())

IDENTITY_MODE_HELP_TEXT = (
    "How identical files are found (the result is the same):\n"
    "  linear     : Compare each file with every earlier file of the same name\n"
    "  bucketed   : Name → Size → xxHash64 buckets, then byte comparison (default)\n"
    "Example:\n"
    "  %(prog)s -s ./dist -t ./installer -f Files.wxs --mode linear"
)

EPILOG_TEXT = """
Examples:
  Generate a fragment with one ComponentGroup per subdirectory of ./dist
  %(prog)s generate -s ./dist -t ./installer -f Files.wxs

  Same as above, but move the previous fragment to trash instead of deleting it
  %(prog)s generate -s ./dist -t ./installer -f Files.wxs --trash-existing

  Write a new Product Id and the given version into Product.wxs
  %(prog)s update-product -s ./installer -f Product.wxs --product-version 1.4.0.27

  Keep an existing Product Id
  %(prog)s update-product -s ./installer -f Product.wxs --product-id 9C2F1C1E-5B7A-4D2B-9C43-8B1A3F0E6D55 --product-version 1.4
"""
