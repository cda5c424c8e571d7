from flagquiz.main import run

raise SystemExit(run())
