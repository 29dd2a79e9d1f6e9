from market.main import run

run()
