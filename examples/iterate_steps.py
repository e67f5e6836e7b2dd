"""Example: drive the Gauss-Newton step by hand and print every guess."""

from trilateration3d import Point, get_sample, step, sum_of_squared_residuals

# six of the seven reference stations
OBSERVATIONS = get_sample("origin")[0][:6]


def main() -> None:
    guess = Point(2, -3, 9)
    print("Initial guess:", guess)
    print("Sum of squares:", sum_of_squared_residuals(OBSERVATIONS, guess))
    for i in range(100):
        print("\nIteration:", i)
        guess = step(OBSERVATIONS, guess)
        print("   New guess:", guess)
        print("   Sum of squares:", sum_of_squared_residuals(OBSERVATIONS, guess))


if __name__ == "__main__":
    main()
