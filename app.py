from bikeflow.config import Settings
from bikeflow.server import serve_traffic_map


def main():
  settings = Settings.from_env()

  serve_traffic_map(settings)


if __name__ == "__main__":
  main()
