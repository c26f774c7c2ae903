from src.hr_attendance.hr_attendance.main import create_app

app = create_app()


if __name__ == "__main__":
    # The reloader would start a second scheduler in the child process.
    app.run(host="0.0.0.0", port=5000, use_reloader=False)
