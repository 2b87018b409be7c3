from run_canceller.cli import run

if __name__ == "__main__":
    run()
