"""Constants shared by the test suite."""

TEST_BUCKET_NAME = "test-contract-portal"
TEST_REGION = "us-east-1"
TEST_PUBLIC_BASE_URL = "http://testserver"

TEST_ZIP_NAME = "contract.zip"
# 10 bytes, enough to tell sizes apart
TEST_ZIP_CONTENT = b"PK\x03\x04zipzip"
TEST_ZIP_CONTENT_TYPE = "application/zip"
