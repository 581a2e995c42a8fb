"""
Python counterpart of public/lib/sample01.js.

Drives the same demo calls against the API and renders the outcome into a
single StatusField, so the demos can be run from a terminal (see
tools/run_demos.py) and exercised in tests.
"""
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import httpx

API_BASE_URL = "http://localhost:3000/api"

STATUS_COLORS = {
    "success": "#4CAF50",
    "error": "#f44336",
    "info": "#2196F3",
    "warning": "#ff9800",
}

SAMPLE_FORM = {
    "name": "Taro Yamada",
    "email": "yamada@example.com",
    "message": "This is a test message",
}

COMM_ERROR = {"status": "error", "message": "Failed to communicate with the API"}

# (value, checked) as read from a group of checkboxes or radio buttons
Control = Tuple[str, bool]


@dataclass
class StatusField:
    text: str = ""
    color: str = ""
    background: Optional[str] = None


class DemoClient:
    def __init__(self, base_url: str = API_BASE_URL, http: Optional[httpx.Client] = None, field: Optional[StatusField] = None):
        self.base_url = base_url.rstrip("/")
        self.http = http if http is not None else httpx.Client(timeout=None)
        self.field = field if field is not None else StatusField()

    def call_api(self, endpoint: str, method: str = "GET", data=None) -> dict:
        """
        Never raises for transport or decoding problems: those come back as COMM_ERROR.
        """
        kwargs = {"headers": {"Content-Type": "application/json"}}
        if data is not None and method != "GET":
            kwargs["json"] = data

        try:
            resp = self.http.request(method, f"{self.base_url}{endpoint}", **kwargs)
            return resp.json()
        except (httpx.HTTPError, ValueError):
            return dict(COMM_ERROR)

    def display_result(self, message: str, level: str = "info"):
        self.field.text = message
        self.field.color = STATUS_COLORS.get(level, STATUS_COLORS["info"])

    def _render(self, result: dict, success_text: str):
        if result.get("status") == "success":
            self.display_result(success_text, "success")
        else:
            self.display_result(f"❌ {result.get('message')}", "error")

    def echo_test(self) -> dict:
        self.display_result("Calling the API...", "info")
        result = self.call_api("/test")
        self._render(result, f"✅ {result.get('message')}")
        return result

    def send_checkboxes(self, checkboxes: Sequence[Control]) -> dict:
        checked_items = [value for value, checked in checkboxes if checked]

        self.display_result("Sending data to the API...", "info")
        result = self.call_api("/checkbox", "POST", {"checkedItems": checked_items})
        self._render(result, f"✅ {result.get('message')} ({result.get('count')} selected)")
        return result

    def send_radio(self, radios: Sequence[Control]) -> Optional[dict]:
        selected = next((value for value, checked in radios if checked), None)
        if selected is None:
            self.display_result("⚠️ No radio button is selected", "warning")
            return None

        self.display_result("Sending data to the API...", "info")
        result = self.call_api("/radio", "POST", {"selectedValue": selected})
        self._render(result, f"{result.get('emoji')} {result.get('message')}")
        if result.get("status") == "success":
            self.field.background = result.get("color")
        return result

    def send_select(self, selected_item: Optional[str]) -> Optional[dict]:
        """selected_item is None when the select control is missing from the page."""
        if selected_item is None:
            self.display_result("⚠️ Select box not found", "warning")
            return None
        if not selected_item:
            self.display_result("⚠️ Nothing is selected", "warning")
            return None

        self.display_result("Sending data to the API...", "info")
        result = self.call_api("/selectbox", "POST", {"selectedItem": selected_item})
        self._render(result, f"✅ {result.get('message')}")
        return result

    def fetch_user_info(self, user_id) -> dict:
        self.display_result(f"Fetching user {user_id}...", "info")
        result = self.call_api(f"/user/{user_id}")

        if result.get("status") == "success":
            user = result["data"]
            self.display_result(f"👤 {user['name']} ({user['role']}) - level: {user['level']}", "success")
        else:
            self.display_result(f"❌ {result.get('message')}", "error")
        return result

    def submit_form(self, form_data: Optional[dict] = None) -> dict:
        self.display_result("Submitting the form...", "info")
        result = self.call_api("/form/submit", "POST", form_data if form_data is not None else SAMPLE_FORM)

        if result.get("status") == "success":
            self.display_result(f"✅ {result['message']} (ID: {result['data']['id']})", "success")
        else:
            self.display_result(f"❌ {result.get('message')}", "error")
        return result

    def get_submissions(self) -> dict:
        self.display_result("Fetching data...", "info")
        result = self.call_api("/form/submissions")
        self._render(result, f"✅ Found {result.get('count')} submission(s)")
        return result

    def check_api_health(self) -> bool:
        return self.call_api("/test").get("status") == "success"

    def close(self):
        self.http.close()
