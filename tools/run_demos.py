"""Run every demo handler against a live server and print the status line after each one."""
from fetchdemo.client import DemoClient


def main():
    client = DemoClient()
    if not client.check_api_health():
        print("[WARN] Cannot reach the API server. Make sure it is running.")

    steps = [
        ("test", lambda: client.echo_test()),
        ("checkbox", lambda: client.send_checkboxes([("Apple", True), ("Banana", True), ("Cherry", False)])),
        ("radio", lambda: client.send_radio([("rdobtn01", False), ("rdobtn02", True), ("rdobtn03", False)])),
        ("selectbox", lambda: client.send_select("cat")),
        ("user", lambda: client.fetch_user_info(1)),
        ("form submit", lambda: client.submit_form()),
        ("submissions", lambda: client.get_submissions()),
    ]
    for name, step in steps:
        step()
        print(f"[{name}] {client.field.text}  ({client.field.color})")

    client.close()


if __name__ == "__main__":
    main()
