from pyrdbed.biology.parameters import ClassicalParams
from pyrdbed.biology.hypofractionation import compare_tissues

"""
Compare a tumor with the dose-limiting normal tissue and print the recommended regime.
"""

def main():

    tissues = {
        "prostate-like tumor": ClassicalParams(alpha_beta=1.5, Dq=1.0),
        "head-and-neck tumor": ClassicalParams(alpha_beta=10.0, Dq=1.0),
    }
    rectum = ClassicalParams(alpha_beta=3.0, Dq=1.0)

    for name, tumor in tissues.items():
        result = compare_tissues(tumor, rectum)
        print(f"{name:>22}: ratio = {result.ratio:.3f} "
              f"(r_T = {result.r_tumor:.3f}, r_N = {result.r_normal:.3f}) -> {result.recommendation}")


if __name__ == "__main__":
    main()
