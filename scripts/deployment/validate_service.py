#!/usr/bin/env python3
"""
Validation script for URL Shortener service.
Exercises a running service over HTTP: health, shorten, redirect and error paths.
"""

import argparse
import sys
import time
import requests
from typing import Optional
from datetime import datetime


class ServiceValidator:
    """Validates URL shortener service functionality."""

    def __init__(self, base_url: str = "http://localhost:8080", timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.test_results = []

    def print_header(self, text: str):
        print(f"\n{'='*60}")
        print(f"  {text}")
        print(f"{'='*60}\n")

    def print_test(self, name: str, passed: bool, details: str = ""):
        """Record and print a test result."""
        status = "PASS" if passed else "FAIL"
        self.test_results.append((name, passed))
        print(f"[{status}] {name}")
        if details:
            print(f"       {details}")

    def test_health_check(self) -> bool:
        """Test health check endpoint."""
        try:
            response = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        except requests.RequestException as e:
            self.print_test("Health Check", False, f"Error: {e}")
            return False

        if response.status_code != 200:
            self.print_test("Health Check", False, f"Status: {response.status_code}")
            return False

        data = response.json()
        is_healthy = data.get("status") == "healthy"
        self.print_test("Health Check", is_healthy, f"Mappings: {data.get('mappings', 'N/A')}")
        return is_healthy

    def test_create_short_url(self, target_url: str) -> Optional[str]:
        """Test creating a short URL; returns the short URL on success."""
        try:
            response = self.session.post(
                f"{self.base_url}/shorten",
                json={"url": target_url},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.print_test("Create Short URL", False, f"Error: {e}")
            return None

        if response.status_code == 200:
            short_url = response.json().get("short_url")
            if short_url:
                self.print_test("Create Short URL", True, f"Short URL: {short_url}")
                return short_url

        self.print_test("Create Short URL", False, f"Status: {response.status_code}")
        return None

    def test_redirect(self, short_url: str, target_url: str) -> bool:
        """Test that the short code redirects to the stored URL."""
        short_code = short_url.rstrip("/").rsplit("/", 1)[-1]
        try:
            response = self.session.get(
                f"{self.base_url}/{short_code}",
                allow_redirects=False,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.print_test("URL Redirect", False, f"Error: {e}")
            return False

        location = response.headers.get("Location", "")
        passed = response.status_code == 302 and location == target_url
        self.print_test(
            "URL Redirect",
            passed,
            f"Status: {response.status_code}, Location: {location or 'none'}",
        )
        return passed

    def _expect_status(self, name: str, method: str, path: str, expected: int, **kwargs) -> bool:
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                allow_redirects=False,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            self.print_test(name, False, f"Error: {e}")
            return False

        passed = response.status_code == expected
        self.print_test(name, passed, f"Status: {response.status_code} (expected {expected})")
        return passed

    def test_invalid_url(self) -> bool:
        return self._expect_status(
            "Invalid URL Rejection", "POST", "/shorten", 400, json={"url": "not-a-valid-url"}
        )

    def test_malformed_body(self) -> bool:
        return self._expect_status(
            "Malformed Body Rejection",
            "POST",
            "/shorten",
            400,
            data="{not json",
            headers={"Content-Type": "application/json"},
        )

    def test_nonexistent_code(self) -> bool:
        return self._expect_status("Non-existent Code", "GET", "/doesnotexist", 404)

    def run_all_tests(self) -> bool:
        """Run all validation tests."""
        self.print_header("URL Shortener Service Validation")
        print(f"Testing service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")

        if not self.test_health_check():
            print("\nHealth check failed. Service may not be running.")
            print(f"   Make sure the service is accessible at {self.base_url}")
            return False

        target_url = f"https://example.com/test/{int(time.time())}"
        short_url = self.test_create_short_url(target_url)
        if short_url:
            self.test_redirect(short_url, target_url)

        self.test_invalid_url()
        self.test_malformed_body()
        self.test_nonexistent_code()

        self.print_summary()

        return all(passed for _, passed in self.test_results)

    def print_summary(self):
        """Print test summary."""
        total = len(self.test_results)
        passed = sum(1 for _, p in self.test_results if p)
        failed = total - passed

        self.print_header("Test Summary")
        print(f"Total Tests:  {total}")
        print(f"Passed:       {passed}")
        print(f"Failed:       {failed}")

        if failed > 0:
            print("\nFailed tests:")
            for name, ok in self.test_results:
                if not ok:
                    print(f"   - {name}")

        print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Validate URL Shortener service functionality"
    )
    parser.add_argument(
        "--url",
        default="http://localhost:8080",
        help="Base URL of the service (default: http://localhost:8080)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=5,
        help="Per-request timeout in seconds (default: 5)"
    )

    args = parser.parse_args()

    validator = ServiceValidator(args.url, timeout=args.timeout)

    try:
        success = validator.run_all_tests()
    except KeyboardInterrupt:
        print("\n\nValidation interrupted by user")
        sys.exit(2)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
