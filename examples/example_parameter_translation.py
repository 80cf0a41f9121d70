from pyrdbed.biology.parameters import ClassicalParams, LQ_CONSISTENT, CALCULATOR_LEGACY
from pyrdbed.biology.translator import classical_to_rd, rd_to_classical

"""
Translate classical survival-curve parameters to the reduced {r, s[, k]} set and back.

This script demonstrates how to:
  - Convert an LQ-form tissue {α, β, D0} and recover it from {r, s, k}.
  - Convert a shoulder-form tissue {α/β, Dq} under both shoulder conventions.
"""

def main():

    ## LQ form
    lq = ClassicalParams(alpha=0.294, beta=0.0294, D0=1.56)
    rd = classical_to_rd(lq)
    back = rd_to_classical(rd)
    print(f"\nLQ form:       {lq}")
    print(f"RD parameters: r = {rd.r:.4f}, s = {rd.s:.4f} 1/Gy, k = {rd.k:.4f} 1/Gy")
    print(f"Recovered:     α = {back.alpha:.4f}, β = {back.beta:.4f}, D0 = {back.D0:.4f}")

    ## Shoulder form under both conventions
    shoulder = ClassicalParams(alpha_beta=3.0, Dq=1.2)
    for convention in (LQ_CONSISTENT, CALCULATOR_LEGACY):
        rd = classical_to_rd(shoulder, convention=convention)
        back = rd_to_classical(rd, convention=convention)
        print(f"\n[{convention.name}] r = {rd.r:.4f}, s = {rd.s:.4f} 1/Gy "
              f"-> α/β = {back.alpha_beta:.3f} Gy, Dq = {back.Dq:.3f} Gy")


if __name__ == "__main__":
    main()
